class FenwickError(Exception):
    """Base class for all errors raised by the Fenwick tree visualizer"""
    pass


class IndexOutOfRange(FenwickError, IndexError):
    """Raised when an index falls outside ``1..N``"""

    def __init__(self, index, length, operation='query'):
        self.index = index
        self.length = length
        self.operation = operation
        super().__init__(f"Invalid {operation} index range (must be between 1 and array length)")


class InvalidIndexFormat(FenwickError, ValueError):
    """Raised when index text does not parse as a non-negative integer"""

    def __init__(self, text, operation='query'):
        self.text = text
        self.operation = operation
        super().__init__(f"Invalid {operation} index")


class InvalidValueFormat(FenwickError, ValueError):
    """Raised when update value text does not parse as a signed 64-bit integer"""

    def __init__(self, text):
        self.text = text
        super().__init__("Invalid update value")


class InvalidLength(FenwickError, ValueError):
    """Raised when the array length is not a positive integer"""

    def __init__(self, length):
        self.length = length
        super().__init__(f"Invalid array length: {length!r}")
