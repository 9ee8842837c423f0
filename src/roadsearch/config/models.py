import os
from math import isfinite
from typing import Annotated, Literal

from pydantic import BaseModel, ConfigDict, Field, ValidationInfo, field_validator

from roadsearch.domain.entities.query import AlgorithmType
from roadsearch.domain.mechanics.mechanics_distance import MULTIPLICITY_BASE


class LogModel(BaseModel):
    model_config = ConfigDict(extra="forbid")
    level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"
    debug: bool = False  # also log cache hits


# ----------------- QUERY ---------------------


class QueryOptionsModel(BaseModel):
    """Toggles the viewer exposes; defaults match a fresh session."""

    model_config = ConfigDict(extra="forbid")
    algorithm: AlgorithmType = AlgorithmType.HYBRID_ASTAR
    heuristic_weight: float = 1.0
    use_manhattan: bool = True
    mark_passed_edges: bool = False

    @field_validator("heuristic_weight")
    @classmethod
    def _finite_nonneg(cls, v: float) -> float:
        if not isfinite(v) or v < 0:
            raise ValueError("heuristic_weight must be finite and >= 0")
        return v


class HeuristicModel(BaseModel):
    model_config = ConfigDict(extra="forbid")
    base_multiplier: float = MULTIPLICITY_BASE

    @field_validator("base_multiplier")
    @classmethod
    def _positive(cls, v: float, info: ValidationInfo) -> float:
        if not isfinite(v) or v <= 0:
            raise ValueError(f"{info.field_name} must be finite and > 0")
        return v


# ----------------- MAP SOURCES ---------------------


class _MapByPath(BaseModel):
    model_config = ConfigDict(extra="forbid")
    file: str
    must_exist: bool = True

    @field_validator("file")
    @classmethod
    def _expand(cls, v: str) -> str:
        return os.path.expandvars(os.path.expanduser(v))


class MapByXmlModel(_MapByPath):
    fmt: Literal["xml"] = "xml"
    coordinate_scale: float = 100_000.0  # raw attributes are degrees * scale

    @field_validator("coordinate_scale")
    @classmethod
    def _nonzero(cls, v: float) -> float:
        if not isfinite(v) or v == 0:
            raise ValueError("coordinate_scale must be finite and non-zero")
        return v


class MapByPickleModel(_MapByPath):
    fmt: Literal["pickle"] = "pickle"


MapSourceUnion = Annotated[MapByXmlModel | MapByPickleModel, Field(discriminator="fmt")]


class ProjectionModel(BaseModel):
    model_config = ConfigDict(extra="forbid")
    width: int = Field(default=1000, gt=0)  # canvas pixels
    height: int = Field(default=800, gt=0)


# ------------------------------------------------------------------


class EngineModel(BaseModel):
    model_config = ConfigDict(extra="forbid")
    name: str = "roadsearch"
    query: QueryOptionsModel = Field(default_factory=QueryOptionsModel)
    heuristic: HeuristicModel = Field(default_factory=HeuristicModel)
    log: LogModel = LogModel()
    map: MapSourceUnion | None = None
    projection: ProjectionModel = Field(default_factory=ProjectionModel)
