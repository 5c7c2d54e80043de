"""Tests for button edge classification."""

import threading

from bilge_monitor.domain.enums import ButtonEventKind
from bilge_monitor.inputs.button import ButtonTracker


def _tracker() -> ButtonTracker:
    return ButtonTracker(silence_hold_ms=5000, debounce_ms=50)


def _kinds(events) -> list[ButtonEventKind]:
    return [e.kind for e in events]


class TestShortPress:
    def test_short_press_requests_config(self) -> None:
        tracker = _tracker()
        tracker.press(1000)
        tracker.release(1200)
        events = tracker.poll(1250)
        assert _kinds(events) == [ButtonEventKind.CONFIG_REQUEST]
        assert events[0].hold_ms == 200

    def test_nothing_until_released(self) -> None:
        tracker = _tracker()
        tracker.press(1000)
        assert tracker.poll(1100) == []
        assert tracker.is_held

    def test_bounce_is_dropped(self) -> None:
        tracker = _tracker()
        tracker.press(1000)
        tracker.release(1010)
        tracker.press(1030)
        tracker.release(1040)
        assert _kinds(tracker.poll(1100)) == [ButtonEventKind.CONFIG_REQUEST]

    def test_separate_presses_each_count(self) -> None:
        tracker = _tracker()
        tracker.press(1000)
        tracker.release(1100)
        tracker.press(2000)
        tracker.release(2100)
        assert _kinds(tracker.poll(2200)) == [
            ButtonEventKind.CONFIG_REQUEST,
            ButtonEventKind.CONFIG_REQUEST,
        ]

    def test_stray_release_ignored(self) -> None:
        tracker = _tracker()
        tracker.release(500)
        assert tracker.poll(600) == []


class TestLongHold:
    def test_fires_once_while_held(self) -> None:
        tracker = _tracker()
        tracker.press(0)
        assert tracker.poll(4999) == []
        events = tracker.poll(5000)
        assert _kinds(events) == [ButtonEventKind.SILENCE_TOGGLE]
        assert tracker.poll(9000) == []
        tracker.release(12_000)
        assert tracker.poll(12_000) == []

    def test_rearmed_after_release(self) -> None:
        tracker = _tracker()
        tracker.press(0)
        tracker.poll(5000)
        tracker.release(6000)
        tracker.poll(6000)
        tracker.press(10_000)
        assert _kinds(tracker.poll(15_000)) == [ButtonEventKind.SILENCE_TOGGLE]

    def test_reported_on_release_when_poll_missed_the_hold(self) -> None:
        tracker = _tracker()
        tracker.press(0)
        tracker.release(6000)
        events = tracker.poll(6100)
        assert _kinds(events) == [ButtonEventKind.SILENCE_TOGGLE]
        assert events[0].hold_ms == 6000

    def test_held_while_silence_disabled_stays_armed(self) -> None:
        tracker = _tracker()
        tracker.press(0)
        assert tracker.poll(6000, silence_enabled=False) == []
        assert _kinds(tracker.poll(6100, silence_enabled=True)) == [ButtonEventKind.SILENCE_TOGGLE]

    def test_long_hold_never_requests_config(self) -> None:
        tracker = _tracker()
        tracker.press(0)
        tracker.release(7000)
        assert tracker.poll(7000, silence_enabled=False) == []


class TestCrossThread:
    def test_edges_from_another_thread(self) -> None:
        tracker = _tracker()

        def producer() -> None:
            tracker.press(100)
            tracker.release(300)

        worker = threading.Thread(target=producer)
        worker.start()
        worker.join()
        assert _kinds(tracker.poll(400)) == [ButtonEventKind.CONFIG_REQUEST]
