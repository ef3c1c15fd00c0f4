# city_tsp/app/build.py
import time
from collections.abc import Mapping
from dataclasses import dataclass

from city_tsp.app.protocols import Solver
from city_tsp.config.models import ScenarioModel
from city_tsp.domain.entities.network import Path
from city_tsp.domain.network import CityNetwork
from city_tsp.io.recorder import JsonlSink, Recorder
from city_tsp.io.records import SolveRecord
from city_tsp.io.solve_logging import SolveLogging  # JSON logs
from city_tsp.runtime.registries import make_solver
from city_tsp.solvers.hooks import NoopHooks, SolverHooks


@dataclass
class App:
    run_id: str
    network: CityNetwork
    solvers: list[Solver]
    hooks: SolverHooks
    recorder: Recorder


def build(
    cfg: ScenarioModel | Mapping,
    *,
    use_logging: bool = True,
    recorder: Recorder | None = None,
) -> App:
    # 0) Validate config
    model = cfg if isinstance(cfg, ScenarioModel) else ScenarioModel.model_validate(cfg)

    # 1) Hooks & recorder
    hooks = (
        SolveLogging(run_id=model.run_id, level=model.log.level, debug=model.log.debug)
        if use_logging
        else NoopHooks()
    )
    recorder = recorder or Recorder(JsonlSink())

    # 2) Network
    network = CityNetwork(model.dataset.path, model.dataset.is_directory)

    # 3) Solvers, in configured order
    solvers = [make_solver(s, hooks=hooks) for s in model.solvers]

    return App(model.run_id, network, solvers, hooks, recorder)


def solve(app: App, solver: Solver) -> tuple[Path, SolveRecord]:
    """Run one solver, timing it and reporting through hooks and the recorder."""
    net = app.network
    app.hooks.solve_start(solver=solver.name, nodes=net.node_count)
    t0 = time.perf_counter()
    try:
        path = solver.solve(net)
    except Exception as exc:
        app.hooks.error(solver=solver.name, exc=exc)
        raise
    wall_ms = (time.perf_counter() - t0) * 1000
    valid = path.is_valid()
    app.hooks.solve_end(
        solver=solver.name, distance=path.distance, valid=valid, hops=len(path), wall_ms=wall_ms
    )
    rec = SolveRecord(
        run_id=app.run_id,
        solver=solver.name,
        nodes=net.node_count,
        distance=path.distance if valid else None,
        valid=valid,
        hops=len(path),
        wall_ms=wall_ms,
    )
    app.recorder.emit(rec)
    return path, rec


def run(app: App) -> list[tuple[Path, SolveRecord]]:
    return [solve(app, s) for s in app.solvers]
