"""Tests for activity tracking and idle compensation."""

import threading

from tidytabs.activity import ActivityStore, IdleCompensator
from tidytabs.core.window import WindowHandle, WindowKind


def handle(name, path=None):
    return WindowHandle(id=name, document_path=path)


class TestActivityStore:
    """Tests for ActivityStore."""

    def test_touch_creates_and_updates(self, store, clock):
        """Test that touch inserts once and then updates in place."""
        w = handle("w")

        assert store.touch(w)
        assert store.get(w) == clock.now

        clock.advance(30)
        store.touch(w)

        assert store.get(w) == clock.now
        assert len(store) == 1

    def test_touch_ignores_tool_windows_and_none(self, store):
        """Test that tool windows are never tracked."""
        tool = WindowHandle(id="solution-explorer", kind=WindowKind.TOOL)

        assert not store.touch(tool)
        assert not store.touch(None)
        assert len(store) == 0

    def test_seed_keeps_existing_record(self, store):
        """Test that seeding does not overwrite a known window."""
        w = handle("w")
        store.touch(w, 10.0)

        assert not store.seed(w, 99.0)
        assert store.get(w) == 10.0
        assert store.seed(handle("new"), 50.0)

    def test_remove_is_idempotent(self, store):
        """Test that removing an untracked window is a no-op."""
        w = handle("w")
        store.touch(w)

        assert store.remove(w)
        assert not store.remove(w)
        assert w not in store

    def test_remove_document(self, store):
        """Test removing every window that shows a document."""
        first = handle("w1", "a.cs")
        split = handle("w2", "a.cs")
        other = handle("w3", "b.cs")
        for w in (first, split, other):
            store.touch(w)

        removed = store.remove_document("a.cs")

        assert set(removed) == {first, split}
        assert other in store
        assert store.remove_document("a.cs") == []

    def test_snapshot_sorted_oldest_first(self, store):
        """Test that snapshots order records by last activity."""
        store.touch(handle("mid"), 20.0)
        store.touch(handle("old"), 10.0)
        store.touch(handle("new"), 30.0)

        assert [r.window.id for r in store.snapshot()] == ["old", "mid", "new"]

    def test_snapshot_is_a_copy(self, store):
        """Test that later mutation does not change a taken snapshot."""
        w = handle("w")
        store.touch(w, 10.0)
        records = store.snapshot()

        store.touch(w, 50.0)
        store.touch(handle("other"), 60.0)

        assert len(records) == 1
        assert records[0].last_seen_at == 10.0

    def test_shift_all(self, store):
        """Test moving records forward in time."""
        a, b = handle("a"), handle("b")
        store.touch(a, 10.0)
        store.touch(b, 100.0)

        assert store.shift_all(5.0) == 2
        assert store.get(a) == 15.0
        assert store.get(b) == 105.0

    def test_shift_all_respects_not_after(self, store):
        """Test that records newer than the cutoff are left alone."""
        a, b = handle("a"), handle("b")
        store.touch(a, 10.0)
        store.touch(b, 100.0)

        assert store.shift_all(40.0, not_after=50.0) == 1
        assert store.get(a) == 50.0
        assert store.get(b) == 100.0

    def test_shift_all_ignores_non_positive(self, store):
        store.touch(handle("a"), 10.0)

        assert store.shift_all(0.0) == 0
        assert store.shift_all(-5.0) == 0
        assert store.get(handle("a")) == 10.0

    def test_prune(self, store):
        """Test dropping records of windows that are gone."""
        live, gone, late = handle("live"), handle("gone"), handle("late")
        store.touch(live, 10.0)
        store.touch(gone, 10.0)
        store.touch(late, 200.0)

        dropped = store.prune([live], seen_before=100.0)

        assert dropped == [gone]
        assert live in store
        assert late in store

    def test_clear(self, store):
        store.touch(handle("a"))
        store.clear()

        assert len(store) == 0

    def test_concurrent_touch_and_snapshot(self):
        """Test that touches from many threads never break a snapshot."""
        store = ActivityStore()
        errors = []

        def writer(offset):
            for i in range(500):
                w = handle(f"w{offset}-{i % 20}")
                store.touch(w, float(i))
                if i % 7 == 0:
                    store.remove(w)

        def reader():
            try:
                for _ in range(200):
                    records = store.snapshot()
                    stamps = [r.last_seen_at for r in records]
                    assert stamps == sorted(stamps)
            except Exception as e:
                errors.append(e)

        threads = [threading.Thread(target=writer, args=(n,)) for n in range(4)]
        threads.append(threading.Thread(target=reader))
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert errors == []
        assert len(store) <= 80


class TestIdleCompensator:
    """Tests for IdleCompensator."""

    def test_no_activity_means_no_idle(self):
        """Test that the first foreground event reports no idle time."""
        idle = IdleCompensator()

        assert idle.begin_foreground(100.0) == 0.0
        assert idle.last_action_at == 100.0

    def test_idle_since_last_action(self):
        """Test measuring time since the application went to the background."""
        idle = IdleCompensator()
        idle.note_activity(100.0)

        assert idle.begin_foreground(1900.0) == 1800.0
        assert idle.last_action_at == 1900.0

    def test_repeated_foreground_events(self):
        """Test that a second regain only measures the new interval."""
        idle = IdleCompensator()
        idle.note_activity(0.0)
        idle.begin_foreground(60.0)

        assert idle.begin_foreground(90.0) == 30.0

    def test_clock_going_backwards(self):
        idle = IdleCompensator()
        idle.note_activity(500.0)

        assert idle.begin_foreground(400.0) == 0.0

    def test_compensated_staleness(self, store):
        """Test that staleness excludes the background interval.

        Touched at t0, backgrounded at t1, foreground again at t2: at t3 the
        window has been idle for (t3 - t0) - (t2 - t1).
        """
        t0, t1, t2, t3 = 0.0, 300.0, 2100.0, 2400.0
        w = handle("w")
        idle = IdleCompensator()

        store.touch(w, t0)
        idle.note_activity(t1)
        store.shift_all(idle.begin_foreground(t2), not_after=t2)

        record = store.snapshot()[0]
        assert record.idle_seconds(t3) == (t3 - t0) - (t2 - t1)
