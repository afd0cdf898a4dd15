"""Note record kept in a user's note store."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class Note:
    """Free text plus the tags it was filed under."""

    text: str
    tags: frozenset[str] = frozenset()

    def matches(self, tags: frozenset[str]) -> bool:
        """Return True when every requested tag is present on the note."""
        return tags <= self.tags
