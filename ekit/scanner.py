"""Row scanning over DB-API cursors."""

from __future__ import annotations

from typing import Any, Iterator, Optional, Protocol, Sequence


class Rows(Protocol):
    """The part of a DB-API cursor the scanner uses.

    ``nextset`` is optional, as in DB-API 2.0.
    """

    @property
    def description(self) -> Optional[Sequence[Sequence[Any]]]: ...

    def fetchone(self) -> Optional[Sequence[Any]]: ...


class NoMoreRowsError(Exception):
    """Raised when the current result set has been read to the end."""

    def __init__(self, message: str = "ekit: 已读取完") -> None:
        super().__init__(message)


class InvalidArgumentError(ValueError):
    """Raised when the rows given to the scanner cannot be used."""


def _detach(value: Any) -> Any:
    if isinstance(value, memoryview):
        return value.tobytes()
    if isinstance(value, bytearray):
        return bytearray(value)
    return value


class SQLRowsScanner:
    """Reads rows from a cursor as lists of values.

    The scanner never closes the cursor; that is the caller's job.
    """

    def __init__(self, rows: Rows) -> None:
        if rows is None:
            raise InvalidArgumentError("ekit: 参数非法 rows 不能为 None")
        try:
            description = rows.description
        except Exception as exc:
            raise InvalidArgumentError(
                f"ekit: 参数非法 无法获取列类型信息: {exc}"
            ) from exc
        if not description:
            raise InvalidArgumentError("ekit: 参数非法 无法获取列类型信息")
        self._rows = rows

    def scan(self) -> list[Any]:
        """Return the next row, or raise NoMoreRowsError at the end."""
        row = self._rows.fetchone()
        if row is None:
            raise NoMoreRowsError()
        return [_detach(value) for value in row]

    def scan_all(self) -> list[list[Any]]:
        """Return every remaining row of the current result set."""
        return list(self)

    def next_result_set(self) -> bool:
        """Move to the next result set, returning whether there is one."""
        nextset = getattr(self._rows, "nextset", None)
        if nextset is None:
            return False
        return bool(nextset())

    def __iter__(self) -> Iterator[list[Any]]:
        while True:
            try:
                yield self.scan()
            except NoMoreRowsError:
                return


def new_sql_rows_scanner(rows: Rows) -> SQLRowsScanner:
    """Create a scanner over ``rows``."""
    return SQLRowsScanner(rows)