# statusbot/status/changes.py
"""
Change detection between two polls.

Records are matched by comparison key. A matched pair counts as updated
when its rendered text differs, so changes that would not alter a post
(a reworded reason with the same display phrase) are not reported.
"""

from dataclasses import dataclass, field
from typing import Callable, Dict, Iterable, List, Optional, Tuple

from .models import ComparisonKey, EventRecord
from ..logging import get_status_logger

logger = get_status_logger("changes")

Render = Callable[[EventRecord], Optional[str]]


@dataclass
class ChangeSet:
    """Result of comparing two polls."""
    added: List[EventRecord] = field(default_factory=list)
    removed: List[EventRecord] = field(default_factory=list)
    # (previous, current)
    updated: List[Tuple[EventRecord, EventRecord]] = field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        return not (self.added or self.removed or self.updated)


def dedupe(records: Iterable[EventRecord]) -> Dict[ComparisonKey, EventRecord]:
    """Index records by comparison key; the first record for a key wins."""
    indexed: Dict[ComparisonKey, EventRecord] = {}
    for record in records:
        indexed.setdefault(record.comparison_key, record)
    return indexed


def diff(previous: Iterable[EventRecord], current: Iterable[EventRecord], render: Render) -> ChangeSet:
    """
    Compare the previous poll with the current one.

    Args:
        previous: Records from the previous poll
        current: Records from this poll
        render: Text used to decide whether a matched pair changed

    Returns:
        ChangeSet in current-feed order (removed in previous-feed order)
    """
    before = dedupe(previous)
    after = dedupe(current)
    changes = ChangeSet()

    for key, record in after.items():
        old = before.get(key)
        if old is None:
            changes.added.append(record)
        elif render(old) != render(record):
            changes.updated.append((old, record))

    for key, record in before.items():
        if key not in after:
            changes.removed.append(record)

    logger.debug(
        "diff_computed",
        added=len(changes.added),
        removed=len(changes.removed),
        updated=len(changes.updated),
    )
    return changes
