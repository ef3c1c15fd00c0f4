# runtime/registries.py
from collections.abc import Callable

from city_tsp.app.protocols import Solver
from city_tsp.config.models import (
    BacktrackingModel,
    GreedyEdgeModel,
    NearestNeighborModel,
    SolverUnion,
    TriangularModel,
)
from city_tsp.solvers.backtracking import BacktrackingSolver
from city_tsp.solvers.greedy_edge import GreedyEdgeSolver
from city_tsp.solvers.hooks import SolverHooks
from city_tsp.solvers.nearest_neighbor import NearestNeighborSolver
from city_tsp.solvers.triangular import TriangularApproxSolver

SolverFactory = Callable[[SolverUnion, dict], Solver]

_solver_registry: dict[str, SolverFactory] = {}


def register_solver(kind: str):
    def deco(fn: SolverFactory):
        _solver_registry[kind] = fn
        return fn

    return deco


def make_solver(cfg: SolverUnion, *, hooks: SolverHooks | None = None) -> Solver:
    try:
        factory = _solver_registry[cfg.kind]
    except KeyError:
        raise ValueError(f"Unknown solver kind {cfg.kind!r}")
    return factory(cfg, {"hooks": hooks})


@register_solver("backtracking")
def _make_backtracking(cfg: BacktrackingModel, deps):
    return BacktrackingSolver(root=cfg.root, prune=cfg.prune, hooks=deps["hooks"])


@register_solver("triangular")
def _make_triangular(cfg: TriangularModel, deps):
    return TriangularApproxSolver(root=cfg.root)


@register_solver("nearest_neighbor")
def _make_nearest(cfg: NearestNeighborModel, deps):
    return NearestNeighborSolver(root=cfg.root, real_only=cfg.real_only)


@register_solver("greedy_edge")
def _make_greedy_edge(cfg: GreedyEdgeModel, deps):
    return GreedyEdgeSolver(root=cfg.root)
