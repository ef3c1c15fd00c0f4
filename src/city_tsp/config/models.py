import os
from typing import Annotated, Literal

from pydantic import BaseModel, ConfigDict, Field, ValidationInfo, field_validator


class LogModel(BaseModel):
    model_config = ConfigDict(extra="forbid")
    level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"
    debug: bool = False


class DatasetModel(BaseModel):
    model_config = ConfigDict(extra="forbid")
    path: str
    # "auto" => directory if path is a directory (nodes.csv + edges.csv), else one edge table
    layout: Literal["auto", "directory", "file"] = "auto"

    @field_validator("path")
    @classmethod
    def _expand(cls, v: str) -> str:
        return os.path.expandvars(os.path.expanduser(v))

    @property
    def is_directory(self) -> bool:
        if self.layout == "auto":
            return os.path.isdir(self.path)
        return self.layout == "directory"


# ----------------- SOLVERS ---------------------


class _SolverBase(BaseModel):
    model_config = ConfigDict(extra="forbid")
    root: int = 0

    @field_validator("root")
    @classmethod
    def _nonneg(cls, v: int, info: ValidationInfo) -> int:
        if v < 0:
            raise ValueError(f"{info.field_name} must be >= 0")
        return v


class BacktrackingModel(_SolverBase):
    kind: Literal["backtracking"] = "backtracking"
    prune: bool = False


class TriangularModel(_SolverBase):
    kind: Literal["triangular"] = "triangular"


class NearestNeighborModel(_SolverBase):
    kind: Literal["nearest_neighbor"] = "nearest_neighbor"
    real_only: bool = False  # walk input edges only, never synthesized ones


class GreedyEdgeModel(_SolverBase):
    kind: Literal["greedy_edge"] = "greedy_edge"


SolverUnion = Annotated[
    BacktrackingModel | TriangularModel | NearestNeighborModel | GreedyEdgeModel,
    Field(discriminator="kind"),
]


def _all_solvers() -> list:
    return [BacktrackingModel(), TriangularModel(), NearestNeighborModel(), GreedyEdgeModel()]


# ------------------------------------------------------------------


class ScenarioModel(BaseModel):
    model_config = ConfigDict(extra="forbid")
    name: str
    run_id: str = "local"
    dataset: DatasetModel
    log: LogModel = LogModel()
    solvers: list[SolverUnion] = Field(default_factory=_all_solvers)
