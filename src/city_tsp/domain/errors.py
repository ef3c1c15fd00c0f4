# city_tsp/domain/errors.py


class NetworkFormatError(ValueError):
    """A dataset row does not have the shape the detected layout expects."""

    def __init__(self, source: str, line: int, msg: str):
        super().__init__(f"{source}:{line}: {msg}")
        self.source, self.line = source, line


class NodeRangeError(IndexError):
    """A node id outside the set of loaded nodes."""

    def __init__(self, node_id: int, msg: str = "unknown node id"):
        super().__init__(f"{msg}: {node_id}")
        self.node_id = node_id


class DatasetNotFoundError(FileNotFoundError):
    pass
