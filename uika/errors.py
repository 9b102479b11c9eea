from pathlib import Path
from typing import Optional, Union


class UikaError(Exception):
    pass


class ParseError(UikaError):
    """A record in the countdown file could not be turned into a Countdown.

    ``row`` is the 1-based record number (the header is row 1). ``field`` is
    the name of the offending field, or None when the row has the wrong
    number of fields.
    """

    def __init__(self, row: int, field: Optional[str], cause: str) -> None:
        self.row = row
        self.field = field
        self.cause = cause
        where = f"row {row}" if field is None else f"row {row}, field {field}"
        super().__init__(f"{where}: {cause}")


class StoreError(UikaError):
    def __init__(self, path: Union[str, Path], cause: OSError) -> None:
        self.path = Path(path)
        self.cause = cause
        reason = cause.strerror or str(cause)
        super().__init__(f"{self.path}: {reason}")
