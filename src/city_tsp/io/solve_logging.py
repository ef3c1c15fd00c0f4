# io/solve_logging.py
import json
import logging
import sys

from city_tsp.solvers.hooks import NoopHooks


class JsonFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        payload = {
            "level": record.levelname,
            "msg": record.getMessage(),
            "logger": record.name,
        }
        extra = getattr(record, "extra", None)
        if isinstance(extra, dict):
            payload.update(extra)
        return json.dumps(payload, default=str)


def default_json_logger(name="city_tsp", level="INFO"):
    logger = logging.getLogger(name)
    if not logger.handlers:
        h = logging.StreamHandler(sys.stdout)
        h.setFormatter(JsonFormatter())
        logger.addHandler(h)
    logger.setLevel(level)
    return logger


class SolveLogging(NoopHooks):
    """
    Structured logs for the solver lifecycle. Improvements found by exact search
    are only logged in debug mode.
    """

    def __init__(
        self,
        run_id: str = "local",
        level: str = "INFO",
        debug: bool = False,
        logger: logging.Logger | None = None,
    ):
        self.run_id, self.debug = run_id, debug
        self.log = logger or default_json_logger(level="DEBUG" if debug else level)

    def _emit(self, level: str, msg: str, **extra):
        payload = {"run_id": self.run_id, **extra}
        self.log.log(getattr(logging, level), msg, extra={"extra": payload})

    def solve_start(self, *, solver: str, nodes: int):
        self._emit("INFO", "solve_start", solver=solver, nodes=nodes)

    def solve_end(self, *, solver: str, distance: float, valid: bool, hops: int, wall_ms: float):
        self._emit(
            "INFO" if valid else "WARNING",
            "solve_end",
            solver=solver,
            distance=distance if valid else None,
            valid=valid,
            hops=hops,
            wall_ms=round(wall_ms, 3),
        )

    def improved(self, *, solver: str, distance: float):
        if self.debug:
            self._emit("DEBUG", "improved", solver=solver, distance=distance)

    def error(self, *, solver: str, exc: BaseException, **extra):
        self._emit("ERROR", "solve_error", solver=solver, error=str(exc), **extra)
