"""Exact-match location table used to pull merchant cities out of details.

File format
-----------
One entry per line, UTF-8. Blank lines and lines starting with ``#`` are
ignored.

- ``ALIAS->CANONICAL``: exactly one ``->``; both sides are stripped and the
  alias maps to the canonical name (``STHLM->STOCKHOLM``).
- ``NAME``: a bare single token maps to itself (``GOTEBORG``).

A bare line containing a space is rejected, as is a line with more than one
``->`` or an empty side.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Mapping
from os import PathLike
from pathlib import Path

from .errors import LocationTableFormatError
from .logging_setup import get_logger

_logger = get_logger("amex_statement.locations")

_ARROW = "->"


class LocationTable(Mapping[str, str]):
    """Read-only mapping of known location strings to canonical names."""

    __slots__ = ("_entries",)

    def __init__(self, entries: Mapping[str, str] | None = None) -> None:
        self._entries: dict[str, str] = dict(entries or {})

    def __getitem__(self, key: str) -> str:
        return self._entries[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __repr__(self) -> str:
        return f"LocationTable({len(self._entries)} entries)"

    def resolve(self, text: str) -> str | None:
        """Canonical location for ``text`` or ``None``; no fuzzy matching."""

        return self._entries.get(text)

    @classmethod
    def from_lines(cls, lines: Iterable[str]) -> LocationTable:
        entries: dict[str, str] = {}
        for lineno, raw in enumerate(lines, start=1):
            line = raw.strip()
            if not line or line.startswith("#"):
                continue
            if _ARROW in line:
                parts = line.split(_ARROW)
                if len(parts) != 2:
                    raise LocationTableFormatError(
                        f"L{lineno}: invalid location map entry {line!r}"
                    )
                alias, canonical = (p.strip() for p in parts)
                if not alias or not canonical:
                    raise LocationTableFormatError(
                        f"L{lineno}: empty side in location map entry {line!r}"
                    )
                entries[alias] = canonical
            elif " " in line:
                raise LocationTableFormatError(f"L{lineno}: invalid location {line!r}")
            else:
                entries[line] = line
        return cls(entries)

    @classmethod
    def from_path(cls, path: str | PathLike[str]) -> LocationTable:
        p = Path(path)
        try:
            text = p.read_text(encoding="utf-8")
        except UnicodeDecodeError as exc:
            raise LocationTableFormatError(f"{p} is not valid UTF-8 text") from exc
        table = cls.from_lines(text.splitlines())
        _logger.info("locations:loaded path=%s entries=%d", p, len(table))
        return table


__all__ = ["LocationTable"]
