"""
Collision registry — opt-in detection of two literals sharing a hash.

The registry is owned by the caller and may be shared across many files
of one run.  A collision is reported, never raised: the rewrite itself
is still valid, only ambiguous.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Dict, List, Optional, Tuple

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Collision:
    """Two different literals that hash to the same value."""
    hash_value: int
    first_literal: bytes
    first_location: str      # "path:line"
    literal: bytes
    location: str


class CollisionRegistry:
    """Remembers the first literal seen for every hash value."""

    def __init__(self) -> None:
        self._seen: Dict[int, Tuple[bytes, str]] = {}
        self.collisions: List[Collision] = []

    def __len__(self) -> int:
        return len(self._seen)

    def record(self, hash_value: int, literal: bytes, location: str) -> Optional[Collision]:
        """
        Register *literal* under *hash_value*.

        Returns the new ``Collision`` if a different literal already owns
        the value, else None.  Re-registering the same literal is fine.
        """
        first = self._seen.get(hash_value)
        if first is None:
            self._seen[hash_value] = (literal, location)
            return None
        first_literal, first_location = first
        if first_literal == literal:
            return None

        collision = Collision(
            hash_value=hash_value,
            first_literal=first_literal,
            first_location=first_location,
            literal=literal,
            location=location,
        )
        self.collisions.append(collision)
        logger.warning(
            "Hash collision 0x%08x: %r (%s) vs %r (%s)",
            hash_value, first_literal, first_location, literal, location,
        )
        return collision

    def table(self) -> Dict[int, bytes]:
        """hash value -> first literal registered under it."""
        return {value: lit for value, (lit, _) in self._seen.items()}
