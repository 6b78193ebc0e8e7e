"""Source text accessors used to resolve decoded token ranges."""

from __future__ import annotations

import re
from pathlib import Path
from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from .semantic_tokens import TokenRange

_LINE_BREAK = re.compile(r"\r\n|\r|\n")


class SourceUnavailable(Exception):
    """Raised when the text under a token range cannot be resolved."""


class SourceTextOf(Protocol):
    """Callable returning the exact text covered by a range."""

    def __call__(self, token_range: TokenRange) -> str: ...


class LinesSource:
    """Accessor over an in-memory document.

    Columns are UTF-16 code units, the default LSP position encoding.  Lines
    holding characters outside the Basic Multilingual Plane (emoji, for
    instance) count each such character as two columns.
    """

    def __init__(self, source: str) -> None:
        # LSP line terminators only; str.splitlines() also breaks on \f, \v, etc.
        self._lines = _LINE_BREAK.split(source)

    @property
    def line_count(self) -> int:
        return len(self._lines)

    def __call__(self, token_range: TokenRange) -> str:
        if not 0 <= token_range.line < len(self._lines):
            raise SourceUnavailable(
                f"Line {token_range.line} is outside the document ({len(self._lines)} lines)"
            )
        line_text = self._lines[token_range.line]
        if line_text.isascii():
            units = len(line_text)
        else:
            encoded = line_text.encode("utf-16-le", "surrogatepass")
            units = len(encoded) // 2
        if token_range.end_char > units:
            raise SourceUnavailable(
                f"Range {token_range} runs past the end of line {token_range.line} "
                f"({units} UTF-16 units)"
            )
        if line_text.isascii():
            return line_text[token_range.start_char : token_range.end_char]
        span = encoded[token_range.start_char * 2 : token_range.end_char * 2]
        return span.decode("utf-16-le", "surrogatepass")


class FileSource:
    """Accessor that reads *path* on first use."""

    def __init__(self, path: str | Path, encoding: str = "utf-8") -> None:
        self.path = Path(path)
        self._encoding = encoding
        self._lines: LinesSource | None = None

    def _load(self) -> LinesSource:
        if self._lines is None:
            try:
                text = self.path.read_text(encoding=self._encoding)
            except (OSError, UnicodeDecodeError) as exc:
                raise SourceUnavailable(f"Cannot read {self.path}: {exc}") from exc
            self._lines = LinesSource(text)
        return self._lines

    def __call__(self, token_range: TokenRange) -> str:
        return self._load()(token_range)
