"""
errors.py — Exception Taxonomy
===============================
Every error the visualizer raises on purpose derives from
SortVisualizerError, so the web layer can turn them into 400s with a
single except clause.

    InvalidSizeError        bad array length   (recoverable, re-supply input)
    InvalidValueError       bad array value    (recoverable, re-supply input)
    IndexOutOfRangeError    algorithm defect   (never expected at runtime)
    SortAbortedError        user pressed stop  (consumed by the controller)
    InvalidTransitionError  controller misuse  (request rejected)
    UnknownAlgorithmError   bad registry key   (request rejected)
"""


class SortVisualizerError(Exception):
    """Base class for all visualizer errors."""


class InvalidSizeError(SortVisualizerError, ValueError):
    def __init__(self, size: int, max_size: int, expected: int = None):
        self.size = size
        self.max_size = max_size
        self.expected = expected
        if expected is not None:
            msg = f"Array has {size} values but size {expected} was requested"
        elif size <= 0:
            msg = "Array must contain at least one value"
        else:
            msg = f"Array size {size} exceeds the maximum of {max_size}"
        super().__init__(msg)


class InvalidValueError(SortVisualizerError, ValueError):
    pass


class IndexOutOfRangeError(SortVisualizerError, IndexError):
    def __init__(self, index, length: int):
        self.index = index
        self.length = length
        super().__init__(f"Index {index!r} out of range for array of length {length}")


class SortAbortedError(SortVisualizerError):
    """Raised at a suspension point once a stop has been requested."""


class InvalidTransitionError(SortVisualizerError, RuntimeError):
    def __init__(self, action: str, state):
        self.action = action
        self.state = state
        label = getattr(state, "value", state)
        super().__init__(f"Cannot {action} while {label}")


class UnknownAlgorithmError(SortVisualizerError, ValueError):
    def __init__(self, key: str):
        self.key = key
        super().__init__(f"Unknown algorithm: {key}")
