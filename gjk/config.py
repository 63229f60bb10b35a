from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING, Annotated, Literal

import yaml
from pydantic import BaseModel, Field, field_validator

if TYPE_CHECKING:
    from gjk.geometry import Geometry, WitnessedDistance

Vec = Annotated[list[float], Field(min_length=3, max_length=3)]


class ToleranceConfig(BaseModel):
    """Real type and epsilon for all comparisons."""

    real: Literal["float32", "float64"] = "float64"
    eps: float | None = None

    @field_validator("eps")
    @classmethod
    def _positive(cls, v: float | None) -> float | None:
        if v is not None and v <= 0:
            raise ValueError("eps must be positive")
        return v

    def bind(self) -> Geometry:
        from gjk.geometry import Geometry
        from gjk.vec3 import REALS, Tolerance

        return Geometry(Tolerance(real=REALS[self.real], eps=self.eps))


class SegmentQuery(BaseModel):
    """Point-segment distance query."""

    kind: Literal["segment"] = "segment"
    name: str
    point: Vec
    a: Vec
    b: Vec

    @property
    def vertices(self) -> list[list[float]]:
        return [self.a, self.b]

    def run(self, geometry: Geometry) -> WitnessedDistance:
        return geometry.point_segment_dist2(self.point, self.a, self.b, witness=True)


class TriangleQuery(BaseModel):
    """Point-triangle distance query."""

    kind: Literal["triangle"] = "triangle"
    name: str
    point: Vec
    a: Vec
    b: Vec
    c: Vec

    @property
    def vertices(self) -> list[list[float]]:
        return [self.a, self.b, self.c]

    def run(self, geometry: Geometry) -> WitnessedDistance:
        return geometry.point_tri_dist2(self.point, self.a, self.b, self.c, witness=True)


Query = Annotated[SegmentQuery | TriangleQuery, Field(discriminator="kind")]


class QueryInputConfig(BaseModel):
    """Top-level configuration for a query file."""

    tolerance: ToleranceConfig = ToleranceConfig()
    queries: list[Query]


def load_config(path: str | Path) -> QueryInputConfig:
    """Load a QueryInputConfig from a YAML file."""
    with open(path) as f:
        data = yaml.safe_load(f)
    return QueryInputConfig.model_validate(data)
