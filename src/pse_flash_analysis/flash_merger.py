# Copyright (c) 2026 pse_flash_analysis contributors
# SPDX-License-Identifier: MIT

"""Merging of transient flash candidates into discrete flash events."""

from dataclasses import replace
from typing import Generic, Iterable, List, Optional, Tuple, TypeVar, Union

from pse_flash_analysis.frame_data import FlashEvent, RedFlashEvent

Event = TypeVar("Event", FlashEvent, RedFlashEvent)


class FlashMerger(Generic[Event]):
    """
    Accumulates time-ordered flash candidates and folds nearby ones together.

    The merger is either idle or accumulating one event. A candidate is
    folded into the accumulated event when it starts within `tolerance`
    seconds of that event's start. Any other candidate closes the
    accumulated event and becomes the new one; a closed event that would
    run past the new one's start is cut short there, so merged events
    never overlap.
    """

    def __init__(self, tolerance: float):
        """
        Args:
            tolerance: Maximum start-to-start gap in seconds for merging
        """
        self.tolerance = tolerance
        self._current: Optional[Event] = None  # None while idle
        self._merged: List[Event] = []

    @property
    def is_idle(self) -> bool:
        return self._current is None

    def _should_merge(self, current: Event, candidate: Event) -> bool:
        return candidate.timestamp - current.timestamp <= self.tolerance

    def push(self, candidate: Event) -> None:
        """Feed the next candidate (candidates must arrive in time order)."""
        if self._current is None:
            self._current = candidate
        elif self._should_merge(self._current, candidate):
            self._current = self._current.merge(candidate)
        else:
            current = self._current
            if candidate.timestamp < current.end:
                current = replace(current, duration=candidate.timestamp - current.timestamp)
            self._merged.append(current)
            self._current = candidate

    def finish(self) -> Tuple[Event, ...]:
        """Close any accumulated event and return the merged events."""
        if self._current is not None:
            self._merged.append(self._current)
            self._current = None
        merged = tuple(self._merged)
        self._merged = []
        return merged


def merge_flashes(
    events: Iterable[Union[FlashEvent, RedFlashEvent]],
    tolerance: float,
) -> Tuple[Union[FlashEvent, RedFlashEvent], ...]:
    """Merge a time-ordered event sequence with the given tolerance."""
    merger: FlashMerger = FlashMerger(tolerance)
    for event in events:
        merger.push(event)
    return merger.finish()
