"""
Lock evaluation for pages with required objects.

Two evaluation rules exist. ``is_locked`` is the rule pages have always been
served with: every lock must match the *first* used object, and evaluation
stops at the first mismatch. ``is_locked_any_subset`` is the plain subset
check. Callers must pass used objects in a stable order to get consistent
results from ``is_locked``.
"""

import logging
from enum import Enum
from typing import Callable, Dict, List, Sequence

from .models import GameObject

logger = logging.getLogger(__name__)

LockRule = Callable[[Sequence[GameObject], Sequence[GameObject]], bool]


class LockMode(Enum):
    """Which lock evaluation rule to apply."""
    FIRST_MATCH = "first-match"
    SUBSET = "subset"


def is_locked(required: Sequence[GameObject], used: Sequence[GameObject]) -> bool:
    """Check whether a page stays locked for the given used objects.

    Each lock is compared against ``used`` in order and the first mismatch
    locks the page, even if a later used object would match. Only a match
    on the first compared entry moves on to the next lock.

    Args:
        required: Lock conditions declared by the page
        used: Objects the player uses, in the order they were supplied

    Returns:
        True if the page is locked
    """
    if not required:
        return False

    if not used:
        return True

    for lock in required:
        for candidate in used:
            if candidate == lock:
                break
            return True

    return False


def is_locked_any_subset(
    required: Sequence[GameObject], used: Sequence[GameObject]
) -> bool:
    """Locked unless every required object appears somewhere in ``used``."""
    available = set(used)
    return any(lock not in available for lock in required)


_RULES: Dict[LockMode, LockRule] = {
    LockMode.FIRST_MATCH: is_locked,
    LockMode.SUBSET: is_locked_any_subset,
}


class LockEvaluator:
    """Applies the lock rule selected by a LockMode."""

    def __init__(self, mode: LockMode = LockMode.FIRST_MATCH):
        self.mode = mode
        self._rule = _RULES[mode]

    def is_locked(
        self, required: Sequence[GameObject], used: Sequence[GameObject]
    ) -> bool:
        locked = self._rule(required, used)
        logger.debug(
            f"Lock check ({self.mode.value}): {len(required)} required, "
            f"{len(used)} used -> {'locked' if locked else 'unlocked'}"
        )
        return locked


def parse_used_objects(header: str) -> List[GameObject]:
    """Parse used objects from a ``key=value; key2=value2`` string.

    Tokens that do not split into exactly one name and one value are
    skipped. Whitespace around names and values is removed.
    """
    objects: List[GameObject] = []
    if not header:
        return objects

    for token in header.split(";"):
        parts = token.split("=")
        if len(parts) != 2:
            continue
        objects.append(GameObject(parts[0].strip(), parts[1].strip()))

    return objects
