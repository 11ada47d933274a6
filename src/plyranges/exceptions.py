from typing import Optional, Sequence

__author__ = "Jayaram Kancherla"
__copyright__ = "jkanche"
__license__ = "MIT"


class InvalidWidthError(ValueError):
    """Raised when an arithmetic operation would produce negative widths.

    Attributes:
        rows:
            Indices of the offending ranges.
    """

    def __init__(self, message: str, rows: Optional[Sequence[int]] = None):
        self.rows = [] if rows is None else [int(r) for r in rows]
        if len(self.rows):
            shown = ", ".join(str(r) for r in self.rows[:10])
            if len(self.rows) > 10:
                shown += ", ..."
            message = f"{message} (rows: {shown})"
        super().__init__(message)


class MissingStrandError(ValueError):
    """Raised when a strand-relative operation is requested on ranges without strand information."""


class SchemaMismatchError(TypeError):
    """Raised when metadata columns sharing a name have incompatible types.

    Attributes:
        column:
            Name of the conflicting column.
    """

    def __init__(self, message: str, column: Optional[str] = None):
        self.column = column
        super().__init__(message)
