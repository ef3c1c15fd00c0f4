# io/recorder.py
import json
import sys
from dataclasses import asdict

from city_tsp.app.protocols import Sink
from city_tsp.io.records import SolveRecord


class JsonlSink:
    def __init__(self, fp=sys.stdout):
        self.fp = fp

    def write(self, rec: SolveRecord) -> None:
        self.fp.write(json.dumps(asdict(rec)) + "\n")


class MemorySink:
    def __init__(self):
        self.records: list[SolveRecord] = []

    def write(self, rec: SolveRecord) -> None:
        self.records.append(rec)


class Recorder:
    def __init__(self, *sinks: Sink):
        self.sinks = sinks or (JsonlSink(),)

    def emit(self, rec: SolveRecord) -> None:
        for s in self.sinks:
            s.write(rec)
