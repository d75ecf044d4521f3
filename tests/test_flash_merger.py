# Copyright (c) 2026 pse_flash_analysis contributors
# SPDX-License-Identifier: MIT

"""Tests for flash event merging."""

import pytest

from pse_flash_analysis.flash_merger import FlashMerger, merge_flashes
from pse_flash_analysis.frame_data import FlashEvent, FlashKind, RedFlashEvent


def flash(timestamp, intensity=0.5, duration=0.01):
    return FlashEvent(timestamp=timestamp, intensity=intensity, duration=duration)


def red_flash(timestamp, intensity=0.5, duration=0.01, saturation=0.9):
    return RedFlashEvent(
        timestamp=timestamp,
        intensity=intensity,
        duration=duration,
        saturation=saturation,
        red_value=200.0,
    )


class TestFlashMerger:
    """Test FlashMerger state machine."""

    def test_starts_idle(self):
        merger = FlashMerger(0.1)
        assert merger.is_idle
        assert merger.finish() == ()

    def test_accumulates_after_push(self):
        merger = FlashMerger(0.1)
        merger.push(flash(0.0))
        assert not merger.is_idle

    def test_finish_returns_to_idle(self):
        merger = FlashMerger(0.1)
        merger.push(flash(0.0))
        assert len(merger.finish()) == 1
        assert merger.is_idle
        assert merger.finish() == ()

    def test_single_event_unchanged(self):
        event = flash(1.0, intensity=0.7, duration=0.04)
        assert merge_flashes([event], 0.1) == (event,)

    def test_distant_events_kept_apart(self):
        events = [flash(0.0), flash(0.5), flash(1.0)]
        assert merge_flashes(events, 0.1) == tuple(events)

    def test_event_running_into_next_is_cut_short(self):
        # Start gap is beyond tolerance, but the second begins inside the first
        events = [flash(0.0, duration=0.3), flash(0.2)]
        merged = merge_flashes(events, 0.1)

        assert len(merged) == 2
        assert merged[0].duration == pytest.approx(0.2)
        assert merged[1].timestamp == 0.2

    def test_long_overlapping_chain_is_not_absorbed(self):
        # Every candidate starts inside its predecessor's span
        events = [flash(0.04 * k, duration=0.08) for k in range(1, 50)]
        merged = merge_flashes(events, 0.1)

        assert len(merged) == 17
        for a, b in zip(merged, merged[1:]):
            assert a.end == pytest.approx(b.timestamp)
        assert merge_flashes(merged, 0.1) == merged

    def test_tolerance_boundary_merges(self):
        events = [flash(0.0), flash(0.1)]
        assert len(merge_flashes(events, 0.1)) == 1


class TestMergeTolerance:
    """Four events 20 ms apart under general and red tolerances."""

    TIMES = (0.0, 0.02, 0.04, 0.06)

    def test_general_tolerance_gives_one_event(self):
        events = [flash(t, intensity=i) for t, i in zip(self.TIMES, (0.3, 0.9, 0.5, 0.6))]
        merged = merge_flashes(events, 0.1)

        assert len(merged) == 1
        assert merged[0].timestamp == 0.0
        assert merged[0].end == pytest.approx(0.07)

    def test_red_tolerance_gives_two_events(self):
        events = [red_flash(t) for t in self.TIMES]
        merged = merge_flashes(events, 0.05)

        assert len(merged) == 2
        assert merged[0].timestamp == 0.0
        assert merged[1].timestamp == 0.06

    def test_merged_kind_is_most_severe(self):
        events = [
            FlashEvent(timestamp=0.0, intensity=0.3, duration=0.01, kind=FlashKind.Subtle),
            FlashEvent(timestamp=0.02, intensity=0.9, duration=0.01, kind=FlashKind.Sudden),
        ]
        assert merge_flashes(events, 0.1)[0].kind == FlashKind.Sudden


class TestMergeProperties:
    """Properties of merged output."""

    @pytest.fixture
    def events(self):
        times = [0.0, 0.03, 0.08, 0.15, 0.2, 0.21, 0.6, 0.64, 1.0, 1.5, 1.55]
        return [flash(t, duration=0.04) for t in times]

    def test_idempotent(self, events):
        once = merge_flashes(events, 0.1)
        assert merge_flashes(once, 0.1) == once

    def test_no_overlap(self, events):
        merged = merge_flashes(events, 0.1)
        for a, b in zip(merged, merged[1:]):
            assert a.end <= b.timestamp

    def test_every_input_is_covered(self, events):
        merged = merge_flashes(events, 0.1)
        for event in events:
            assert any(m.timestamp <= event.timestamp <= m.end for m in merged)

    def test_time_ordered(self, events):
        merged = merge_flashes(events, 0.1)
        timestamps = [m.timestamp for m in merged]
        assert timestamps == sorted(timestamps)
