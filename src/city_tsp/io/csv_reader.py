# io/csv_reader.py
import csv
import os

from city_tsp.domain.errors import DatasetNotFoundError

Row = list[str]

NODES_FILE = "nodes.csv"
EDGES_FILE = "edges.csv"


def read(path: str) -> list[Row]:
    """Read a CSV file into rows of raw string fields (blank lines dropped)."""
    if not os.path.isfile(path):
        raise DatasetNotFoundError(f"{path} not found")
    with open(path, newline="", encoding="utf-8-sig") as f:
        return [[cell.strip() for cell in row] for row in csv.reader(f) if row]


def dataset_files(directory: str) -> tuple[str, str]:
    """Return (nodes.csv, edges.csv) inside a dataset directory, checking both exist."""
    nodes, edges = os.path.join(directory, NODES_FILE), os.path.join(directory, EDGES_FILE)
    missing = [p for p in (nodes, edges) if not os.path.isfile(p)]
    if missing:
        raise DatasetNotFoundError(f"{', '.join(missing)} not found in {directory}")
    return nodes, edges
