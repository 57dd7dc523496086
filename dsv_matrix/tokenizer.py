"""
Quote-aware field splitting for dsv-matrix.

A line is split naively on the delimiter, then quoted fields that the
split broke apart are stitched back together. For example, with a comma
delimiter the line ``"1,2",3`` splits into ``"1``, ``2"`` and ``3``; the
first two pieces are re-joined with the delimiter, giving the two fields
``"1,2"`` and ``3``.

Quote characters are kept verbatim in the emitted field. Quoted fields
never span lines.
"""

from __future__ import annotations

from typing import Iterator

from dsv_matrix.exceptions import UnterminatedQuoteError

QUOTE = '"'


def _opens_quote(token: str) -> bool:
    """True if *token* starts a quoted field that is not closed yet.

    Length is checked before indexing, so empty fields are never
    mistaken for quotes. A lone ``"`` opens a field.
    """
    if not token or token[0] != QUOTE:
        return False
    return len(token) == 1 or token[-1] != QUOTE


def split_fields(line: str, delimiter: str, line_number: int = 0) -> Iterator[str]:
    """Lazily yield the trimmed fields of *line*.

    Args:
        line: One line of text, without its line terminator.
        delimiter: Single-character field separator.
        line_number: Zero-based index of the line, used in error messages.

    Yields:
        Field strings with leading/trailing whitespace removed. A quoted
        field is emitted as one string even if it contains delimiters.

    Raises:
        UnterminatedQuoteError: If a quoted field has no closing quote
            before the end of the line.
    """
    pieces = iter(line.split(delimiter))
    for piece in pieces:
        token = piece.strip()
        if _opens_quote(token):
            parts = [token]
            while True:
                try:
                    piece = next(pieces)
                except StopIteration:
                    raise UnterminatedQuoteError(line_number) from None
                parts.append(piece)
                if piece.rstrip().endswith(QUOTE):
                    break
            token = delimiter.join(parts).strip()
        yield token


def count_fields(line: str, delimiter: str, line_number: int = 0) -> int:
    """Return the number of fields ``split_fields`` would yield."""
    return sum(1 for _ in split_fields(line, delimiter, line_number))
