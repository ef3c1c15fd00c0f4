# main.py
import json
import sys

from city_tsp.app.build import build, run
from city_tsp.io.recorder import MemorySink, Recorder
from city_tsp.io.report import format_network, format_path


def main(argv: list[str]) -> int:
    if len(argv) != 2:
        print(f"usage: {argv[0]} <scenario.json>", file=sys.stderr)
        return 2
    with open(argv[1], encoding="utf-8") as f:
        cfg = json.load(f)

    app = build(cfg, recorder=Recorder(MemorySink()))
    print(format_network(app.network))
    for path, rec in run(app):
        print(f"\n== {rec.solver} ({rec.wall_ms:.1f} ms)")
        print(format_path(path, app.network))
    return 0


if __name__ == "__main__":
    sys.exit(main(sys.argv))
