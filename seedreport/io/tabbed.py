"""Tab-delimited reader with a header line and named-column access.

The first line of the input names the columns. Callers resolve column names
to indices once with `find_field()` and then read each `Line` by index.
Every `Line` remembers its 1-based line number so that conversion failures
point at the offending record.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import IO, Iterator, List, Optional, Tuple, Union

from seedreport.errors import MalformedValueError, MissingFieldError

#: Lower-cased values treated as true by `Line.get_flag`.
TRUE_VALUES = frozenset({"1", "y", "yes", "t", "true"})


@dataclass(frozen=True, slots=True)
class Line:
    """One data line split into columns."""

    fields: Tuple[str, ...]
    line_number: int
    source: str

    def get(self, index: int) -> str:
        """Return the raw string in column `index`.

        Raises:
            MalformedValueError: If the line has no such column.
        """
        if index < 0 or index >= len(self.fields):
            raise MalformedValueError(
                f"missing column {index + 1} (line has {len(self.fields)} columns)",
                source=self.source,
                line_number=self.line_number,
            )
        return self.fields[index]

    def get_int(self, index: int) -> int:
        """Return column `index` as an integer.

        Raises:
            MalformedValueError: If the column is missing or not an integer.
        """
        value = self.get(index).strip()
        try:
            return int(value)
        except ValueError:
            raise MalformedValueError(
                f"column {index + 1} is not an integer: {value!r}",
                source=self.source,
                line_number=self.line_number,
            ) from None

    def get_flag(self, index: int) -> bool:
        """Return column `index` interpreted as a truth value."""
        return self.get(index).strip().lower() in TRUE_VALUES


class TabbedLineReader:
    """Iterate over the data lines of a tab-delimited file with a header.

    Files are read as bytes and decoded as UTF-8 one line at a time, so a bad
    byte is reported with the number of the line that holds it.

    Args:
        source: Path to the file, or an open text or binary stream.
        name: Name used in diagnostics; defaults to the path or stream name.

    Raises:
        MalformedValueError: If the input has no header line or the header is
            not valid UTF-8.
    """

    def __init__(
        self,
        source: Union[str, Path, IO[str], IO[bytes]],
        name: Optional[str] = None,
    ) -> None:
        if isinstance(source, (str, Path)):
            self._stream: Union[IO[str], IO[bytes]] = open(source, "rb")
            self._owns_stream = True
            self.name = name or str(source)
        else:
            self._stream = source
            self._owns_stream = False
            self.name = name or str(getattr(source, "name", "<stream>"))

        self._line_number = 1
        try:
            header = self._decode(self._stream.readline())
        except MalformedValueError:
            self.close()
            raise
        if not header:
            self.close()
            raise MalformedValueError("missing header line", source=self.name)
        self.headers: List[str] = [h.strip() for h in header.rstrip("\r\n").split("\t")]

    def _decode(self, raw: Union[str, bytes]) -> str:
        if isinstance(raw, str):
            return raw
        try:
            return raw.decode("utf-8")
        except UnicodeDecodeError as e:
            raise MalformedValueError(
                f"invalid UTF-8 byte 0x{raw[e.start]:02x} at position {e.start}",
                source=self.name,
                line_number=self._line_number,
            ) from e

    def find_field(self, name: str) -> int:
        """Return the 0-based index of the column called `name`.

        Raises:
            MissingFieldError: If no header has that name.
        """
        try:
            return self.headers.index(name)
        except ValueError:
            raise MissingFieldError(name, self.name) from None

    @property
    def line_number(self) -> int:
        """Number of the last physical line read, counting the header."""
        return self._line_number

    def __iter__(self) -> Iterator[Line]:
        for raw in self._stream:
            self._line_number += 1
            text = self._decode(raw).rstrip("\r\n")
            if not text.strip():
                continue
            yield Line(tuple(text.split("\t")), self._line_number, self.name)

    def close(self) -> None:
        if self._owns_stream:
            self._stream.close()

    def __enter__(self) -> "TabbedLineReader":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()
