from dataclasses import dataclass

import numpy as np

REALS: dict[str, type[np.floating]] = {
    "float32": np.float32,
    "float64": np.float64,
}


def as_vec3(v, real: type[np.floating] = np.float64) -> np.ndarray:
    """Convert array-like to a length-3 vector of the given real type."""
    arr = np.asarray(v, dtype=real)
    if arr.shape != (3,):
        raise ValueError(f"Expected a 3D vector, got shape {arr.shape}")
    return arr


def len2(v: np.ndarray):
    return np.dot(v, v)


def dist2(a: np.ndarray, b: np.ndarray):
    d = a - b
    return np.dot(d, d)


@dataclass(frozen=True)
class Tolerance:
    """
    Epsilon-aware comparisons for one real type.

    is_zero() is an absolute test. eq() accepts values whose difference is
    below eps either absolutely or relative to the larger magnitude.
    """

    real: type[np.floating] = np.float64
    eps: float | None = None

    def __post_init__(self):
        if self.eps is None:
            object.__setattr__(self, "eps", float(np.finfo(self.real).eps))
        if self.eps <= 0:
            raise ValueError(f"eps must be positive, got {self.eps}")

    def is_zero(self, x) -> bool:
        return bool(abs(x) < self.eps)

    def eq(self, a, b) -> bool:
        ab = abs(a - b)
        if ab < self.eps:
            return True
        return bool(ab < self.eps * max(abs(a), abs(b)))

    def vec_eq(self, a: np.ndarray, b: np.ndarray) -> bool:
        return all(self.eq(x, y) for x, y in zip(a, b, strict=True))

    def vec3(self, v) -> np.ndarray:
        return as_vec3(v, self.real)
