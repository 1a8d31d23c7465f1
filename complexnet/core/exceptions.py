"""
Custom exceptions for ``complexnet``
"""


class ComplexNetException(Exception):
    """
    Base exception for all exceptions in complexnet
    """
    pass


class IndexOutOfRange(ComplexNetException, IndexError):
    """
    Raised when a node or link index is outside its dense range
    """
    def __init__(self, kind, index, count):
        self.kind = kind
        self.index = index
        self.count = count
        super().__init__(f"{kind} index {index} out of range [0, {count})")


class CapacityExceeded(ComplexNetException, ValueError):
    """
    Raised by strict node insertion when the request exceeds ``max_size``
    """
    def __init__(self, requested, available, max_size):
        self.requested = requested
        self.available = available
        self.max_size = max_size
        super().__init__(
            f"Cannot add {requested} nodes: only {available} free slots (max_size={max_size})"
        )


class MalformedInputError(ComplexNetException, ValueError):
    """
    Raised when a file record cannot be parsed during import
    """
    def __init__(self, message, line_no=None):
        self.line_no = line_no
        if line_no is not None:
            message = f"line {line_no}: {message}"
        super().__init__(message)


class CapacityWarning(UserWarning):
    """
    Emitted when ``add_nodes`` is clamped to the network capacity
    """
    pass
