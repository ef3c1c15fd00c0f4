# city_tsp/io/records.py

from dataclasses import dataclass


# One row per solver invocation, written by the Recorder sinks
@dataclass
class SolveRecord:
    run_id: str
    solver: str
    nodes: int
    distance: float | None  # None => no tour found
    valid: bool
    hops: int
    wall_ms: float
