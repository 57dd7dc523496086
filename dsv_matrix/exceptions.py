"""
Custom exception hierarchy for dsv-matrix.

Every error is fatal to the load that raised it: nothing is retried and
no rows are skipped. Callers catch ``DsvMatrixError`` for "the load
failed" or a specific subclass when they want to react to one kind
(e.g. a mapper reused across files with different shapes).
"""


class DsvMatrixError(Exception):
    """Base exception for all dsv-matrix errors."""


class FileOpenError(DsvMatrixError, OSError):
    """Raised when the input file cannot be opened for reading.

    Reported before any parsing begins; the message names the file.
    """


class FileDecodeError(DsvMatrixError, ValueError):
    """Raised when the input file is not valid in the configured encoding.

    ``line`` is the number of lines read successfully before the failure;
    the undecodable bytes are at or after that line.
    """

    def __init__(self, path: object, encoding: str, line: int) -> None:
        self.path = path
        self.encoding = encoding
        self.line = line
        super().__init__(
            f"Cannot decode file '{path}' as {encoding} at or after line {line}"
        )


class AllocationError(DsvMatrixError, ValueError):
    """Raised when a caller-supplied allocator returns the wrong shape."""


class DimensionalityMismatchError(DsvMatrixError):
    """Raised when a mapper's dimensionality disagrees with the data.

    A mapper with a non-zero dimensionality can be reused across loads,
    but only for files whose dimension axis has the same length.
    """

    def __init__(self, expected: int, actual: int) -> None:
        self.expected = expected
        self.actual = actual
        super().__init__(
            f"given DatasetMapper has dimensionality {expected}, "
            f"but data has dimensionality {actual}"
        )


class WrongFieldCountError(DsvMatrixError):
    """Raised when a record does not have the expected number of fields.

    ``index`` is the offending line in the normal orientation and the
    offending column in the transposed orientation.
    """

    def __init__(self, index: int, found: int, expected: int, axis: str = "line") -> None:
        self.index = index
        self.found = found
        self.expected = expected
        self.axis = axis
        super().__init__(
            f"wrong number of dimensions ({found}) on {axis} {index}; "
            f"should be {expected} dimensions"
        )


class UnterminatedQuoteError(DsvMatrixError):
    """Raised when a quoted field has no closing quote on its line."""

    def __init__(self, line: int) -> None:
        self.line = line
        super().__init__(f"unterminated quoted field at line {line}")


class TokenConversionError(DsvMatrixError):
    """Raised when the mapping policy rejects a token.

    For example, a non-numeric token under the numeric policy, or a
    missing value that cannot be represented in an integer dtype.
    """

    def __init__(self, token: str, position: int, reason: str = "") -> None:
        self.token = token
        self.position = position
        message = f"cannot convert token {token!r} in dimension {position}"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message)


class ConfigValidationError(DsvMatrixError):
    """Raised when a loader configuration is invalid.

    This can happen if:
    - The YAML file is empty.
    - ``dtype`` is not a float or integer numpy dtype.
    """


class ExportError(DsvMatrixError):
    """Raised when a matrix or mapping table cannot be written.

    For example, permission errors, disk full, or unsupported format.
    """
