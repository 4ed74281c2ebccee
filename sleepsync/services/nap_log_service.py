"""Today's nap log: pure list edits plus a small in-process holder."""

import logging
from collections.abc import Sequence
from typing import Optional
from uuid import uuid4

from sleepsync.models.nap import ObservedNap
from sleepsync.services.clock import duration_between, minutes_to_time, time_to_minutes

logger = logging.getLogger(__name__)


def add_observed_nap(
    naps: Sequence[ObservedNap],
    start: Optional[str],
    end: Optional[str],
    nap_id: Optional[str] = None,
) -> list[ObservedNap]:
    """Return a new list with the nap added, sorted by start time.

    A blank start or end leaves the list unchanged.
    """
    if not start or not start.strip() or not end or not end.strip():
        return list(naps)

    nap = ObservedNap(
        id=nap_id or uuid4().hex,
        start=minutes_to_time(time_to_minutes(start)),
        end=minutes_to_time(time_to_minutes(end)),
        duration=duration_between(start, end),
    )
    return sorted([*naps, nap], key=lambda n: time_to_minutes(n.start))


def remove_observed_nap(naps: Sequence[ObservedNap], nap_id: str) -> list[ObservedNap]:
    """Return a new list without the nap with this id."""
    return [n for n in naps if n.id != nap_id]


class NapLog:
    """Nap log for the running process, one writer at a time."""

    def __init__(self) -> None:
        self._naps: list[ObservedNap] = []

    @property
    def naps(self) -> list[ObservedNap]:
        return list(self._naps)

    def add(self, start: Optional[str], end: Optional[str]) -> list[ObservedNap]:
        updated = add_observed_nap(self._naps, start, end)
        if len(updated) != len(self._naps):
            logger.info("Nap logged %s → %s", start, end)
        self._naps = updated
        return self.naps

    def remove(self, nap_id: str) -> bool:
        """Drop a nap. Returns True if it was in the log."""
        updated = remove_observed_nap(self._naps, nap_id)
        removed = len(updated) != len(self._naps)
        if removed:
            logger.info("Nap %s removed", nap_id)
        self._naps = updated
        return removed

    def clear(self) -> None:
        self._naps = []
        logger.info("Nap log cleared")
