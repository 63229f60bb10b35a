from dataclasses import dataclass, field
from typing import Literal, overload

import numpy as np

from gjk.vec3 import Tolerance, dist2, len2


class DegenerateGeometryError(ValueError):
    """Raised when a primitive has no well-defined closest point."""


class DegenerateSegmentError(DegenerateGeometryError):
    pass


class DegenerateTriangleError(DegenerateGeometryError):
    pass


@dataclass(frozen=True)
class Distance:
    """Squared distance from a query point to a primitive."""

    dist2: float


@dataclass(frozen=True, eq=False)
class WitnessedDistance(Distance):
    """Squared distance together with the closest point on the primitive."""

    witness: np.ndarray

    def __eq__(self, other):
        if other.__class__ is not self.__class__:
            return NotImplemented
        return bool(self.dist2 == other.dist2) and np.array_equal(self.witness, other.witness)

    __hash__ = None  # type: ignore[assignment]


Proximity = Distance | WitnessedDistance


def _nonneg(tol: Tolerance, x) -> bool:
    return x > 0 or tol.is_zero(x)


def _at_most_one(tol: Tolerance, x) -> bool:
    return x < 1 or tol.eq(x, 1)


@dataclass(frozen=True)
class Geometry:
    """Point-to-primitive distance queries bound to one tolerance."""

    tol: Tolerance = field(default_factory=Tolerance)

    @overload
    def point_segment_dist2(self, P, x0, b, witness: Literal[False] = ...) -> Distance: ...

    @overload
    def point_segment_dist2(self, P, x0, b, witness: Literal[True]) -> WitnessedDistance: ...

    def point_segment_dist2(self, P, x0, b, witness: bool = False) -> Proximity:
        """
        Squared distance from point P to the closed segment [x0, b].

        The segment is S(t) = x0 + t*d with d = b - x0 and t in [0, 1].
        |S(t) - P|^2 is quadratic in t; its minimizer is clamped to the
        segment endpoints.

        Args:
            P: Query point
            x0: First segment endpoint
            b: Second segment endpoint
            witness: Also return the closest point on the segment

        Returns:
            Distance, or WitnessedDistance if witness is True

        Raises:
            DegenerateSegmentError: if x0 and b coincide
        """
        P, x0, b = self.tol.vec3(P), self.tol.vec3(x0), self.tol.vec3(b)
        if self.tol.vec_eq(x0, b):
            raise DegenerateSegmentError(f"Segment endpoints coincide: {x0}")
        return self._segment(P, x0, b, witness)

    def _segment(self, P, x0, b, witness: bool) -> Proximity:
        d = b - x0
        a = x0 - P

        t = -np.dot(a, d) / len2(d)

        if t < 0 or self.tol.is_zero(t):
            return self._result(dist2(x0, P), x0.copy() if witness else None)
        if t > 1 or self.tol.eq(t, 1):
            return self._result(dist2(b, P), b.copy() if witness else None)

        if witness:
            w = x0 + t * d
            return WitnessedDistance(dist2(w, P), w)
        return Distance(len2(t * d + a))

    @overload
    def point_tri_dist2(self, P, x0, B, C, witness: Literal[False] = ...) -> Distance: ...

    @overload
    def point_tri_dist2(self, P, x0, B, C, witness: Literal[True]) -> WitnessedDistance: ...

    def point_tri_dist2(self, P, x0, B, C, witness: bool = False) -> Proximity:
        """
        Squared distance from point P to the closed triangle (x0, B, C).

        The triangle plane is T(s, t) = x0 + s*d1 + t*d2 with d1 = B - x0
        and d2 = C - x0. The unconstrained minimizer of |T(s, t) - P|^2 is
        used if it lies inside the triangle; otherwise the closest point is
        on one of the three edges.

        Args:
            P: Query point
            x0, B, C: Triangle vertices
            witness: Also return the closest point on the triangle

        Returns:
            Distance, or WitnessedDistance if witness is True

        Raises:
            DegenerateTriangleError: if the vertices are (nearly) collinear
        """
        tol = self.tol
        P, x0, B, C = tol.vec3(P), tol.vec3(x0), tol.vec3(B), tol.vec3(C)
        if tol.vec_eq(x0, B) or tol.vec_eq(x0, C):
            raise DegenerateTriangleError("Triangle has coincident vertices")

        d1 = B - x0
        d2 = C - x0
        a = x0 - P

        u = np.dot(a, a)
        v = np.dot(d1, d1)
        w = np.dot(d2, d2)
        p = np.dot(a, d1)
        q = np.dot(a, d2)
        r = np.dot(d1, d2)

        det = w * v - r * r
        # det / (w * v) is sin^2 of the angle at x0
        if tol.is_zero(det / (w * v)):
            raise DegenerateTriangleError("Triangle vertices are collinear")

        s = (q * r - w * p) / det
        t = (-s * r - q) / w

        if (_nonneg(tol, s) and _at_most_one(tol, s)
                and _nonneg(tol, t) and _at_most_one(tol, t)
                and _at_most_one(tol, s + t)):
            if witness:
                pt = x0 + s * d1 + t * d2
                return WitnessedDistance(dist2(pt, P), pt)
            dist = s * s * v
            dist += t * t * w
            dist += 2 * s * t * r
            dist += 2 * s * p
            dist += 2 * t * q
            dist += u
            # Rounding can push points lying on the triangle slightly below zero
            return Distance(np.maximum(dist, 0))

        # Projection is outside the triangle: closest point is on an edge
        best = self._segment(P, x0, B, witness)
        for e0, e1 in ((x0, C), (B, C)):
            res = self._segment(P, e0, e1, witness)
            if res.dist2 < best.dist2:
                best = res
        return best

    @staticmethod
    def _result(d, pt: np.ndarray | None) -> Proximity:
        if pt is None:
            return Distance(d)
        return WitnessedDistance(d, pt)


DEFAULT_GEOMETRY = Geometry()


@overload
def point_segment_dist2(P, x0, b, witness: Literal[False] = ...) -> Distance: ...


@overload
def point_segment_dist2(P, x0, b, witness: Literal[True]) -> WitnessedDistance: ...


def point_segment_dist2(P, x0, b, witness: bool = False) -> Proximity:
    """Squared point-segment distance using the default float64 tolerance."""
    return DEFAULT_GEOMETRY.point_segment_dist2(P, x0, b, witness=witness)


@overload
def point_tri_dist2(P, x0, B, C, witness: Literal[False] = ...) -> Distance: ...


@overload
def point_tri_dist2(P, x0, B, C, witness: Literal[True]) -> WitnessedDistance: ...


def point_tri_dist2(P, x0, B, C, witness: bool = False) -> Proximity:
    """Squared point-triangle distance using the default float64 tolerance."""
    return DEFAULT_GEOMETRY.point_tri_dist2(P, x0, B, C, witness=witness)
