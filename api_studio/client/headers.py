"""
Ordered header list with enable/disable semantics.

The list keeps rows exactly as the user edits them, including blank and
disabled rows and duplicate keys. Only ``effective_map()`` decides what is
actually sent.
"""

from collections.abc import Iterable, Iterator, Mapping

from ..schemas.request import HeaderEntry


HEADER_FIELDS = frozenset({"key", "value", "enabled"})


class HeaderList:
    """Ordered collection of ``HeaderEntry`` rows."""

    def __init__(self, entries: Iterable[HeaderEntry] | None = None):
        self._entries: list[HeaderEntry] = [e.model_copy() for e in entries or ()]

    @classmethod
    def from_mapping(cls, headers: Mapping[str, str]) -> "HeaderList":
        """Expand a flat header mapping into enabled rows, in mapping order."""
        return cls(HeaderEntry(key=k, value=v, enabled=True) for k, v in headers.items())

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[HeaderEntry]:
        return iter(self._entries)

    def __getitem__(self, index: int) -> HeaderEntry:
        return self._entries[index]

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, HeaderList):
            return NotImplemented
        return self._entries == other._entries

    def __repr__(self) -> str:
        return f"HeaderList({self._entries!r})"

    @property
    def entries(self) -> list[HeaderEntry]:
        """A shallow copy of the rows."""
        return list(self._entries)

    def add(self) -> HeaderEntry:
        """Append a blank enabled row and return it."""
        entry = HeaderEntry()
        self._entries.append(entry)
        return entry

    def update(self, index: int, field: str, value: str | bool) -> None:
        """
        Set one field of the row at ``index``.

        An index outside the list is ignored so that stale editor callbacks
        are harmless.

        Raises:
            ValueError: If ``field`` is not one of key, value, enabled
        """
        if field not in HEADER_FIELDS:
            raise ValueError(f"Unknown header field: {field!r}")
        if not 0 <= index < len(self._entries):
            return
        setattr(self._entries[index], field, value)

    def remove(self, index: int) -> None:
        """Delete the row at ``index``. Out-of-range indexes are ignored."""
        if 0 <= index < len(self._entries):
            del self._entries[index]

    def effective_map(self) -> dict[str, str]:
        """
        Project the rows that are actually sent.

        Only enabled rows with a non-empty key and value are kept; a later row
        overrides an earlier one with the same (case-sensitive) key.
        """
        headers: dict[str, str] = {}
        for entry in self._entries:
            if entry.enabled and entry.key and entry.value:
                headers[entry.key] = entry.value
        return headers
