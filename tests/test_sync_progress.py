"""Tests for progress tracking and the CLI progress displays."""

from pathlib import Path
from unittest.mock import Mock

from pymirror.cli_progress import SyncProgressDisplay, create_line_tracker
from pymirror.output import OutputFormatter
from pymirror.sync.progress import (
    SyncProgressEvent,
    SyncProgressInfo,
    SyncProgressTracker,
)
from pymirror.sync.scanner import FileRecord


def _record(relative_path: str = "docs/a.txt") -> FileRecord:
    path = Path("/src") / relative_path
    return FileRecord(
        path=path, relative_path=relative_path, directory=path.parent, mtime=0.0, size=1
    )


class TestSyncProgressTracker:
    """Tests for SyncProgressTracker."""

    def test_notify_calls_matching_slot(self):
        """Each event reaches only its own slot."""
        before_copy = Mock()
        after_delete = Mock()
        tracker = SyncProgressTracker(before_copy=before_copy, after_delete=after_delete)
        record = _record()

        tracker.notify(SyncProgressEvent.BEFORE_COPY, record, 1, 3)

        before_copy.assert_called_once_with(record, 1, 3, True)
        after_delete.assert_not_called()

    def test_unregistered_slot_is_ignored(self):
        """Events without a slot do nothing."""
        tracker = SyncProgressTracker()

        tracker.notify(SyncProgressEvent.AFTER_DELETE, _record(), 0, 1, False)

    def test_generic_callback_receives_info(self):
        """The generic callback gets a SyncProgressInfo for every event."""
        events = []
        tracker = SyncProgressTracker(callback=events.append)
        record = _record()

        tracker.notify(SyncProgressEvent.AFTER_COPY, record, 0, 2, False)

        assert events == [
            SyncProgressInfo(
                event=SyncProgressEvent.AFTER_COPY,
                file=record,
                index=0,
                total=2,
                success=False,
            )
        ]


class TestLineTracker:
    """Tests for the plain line progress output."""

    def test_copy_lines(self):
        """One line per file with the counter announced before the copy."""
        out = Mock(spec=OutputFormatter)
        tracker = create_line_tracker(out)
        record = _record()

        tracker.notify(SyncProgressEvent.BEFORE_COPY, record, 2, 4)
        tracker.notify(SyncProgressEvent.AFTER_COPY, record, 1, 4, False)

        out.info.assert_called_once_with("docs/a.txt 2 of 4 (50.00%) - Error")

    def test_delete_lines(self):
        out = Mock(spec=OutputFormatter)
        tracker = create_line_tracker(out)
        record = _record("old.txt")

        tracker.notify(SyncProgressEvent.BEFORE_DELETE, record, 1, 1)
        tracker.notify(SyncProgressEvent.AFTER_DELETE, record, 1, 1, True)

        out.info.assert_called_once_with("old.txt 1 of 1 (100.00%) - Deleted!")


class TestSyncProgressDisplay:
    """Tests for the Rich progress display."""

    def test_display_advances_tasks(self):
        """Copy and delete bars advance once per file."""
        with SyncProgressDisplay(files_to_copy=2, files_to_delete=1) as display:
            tracker = display.create_tracker()
            for index, name in enumerate(["a.txt", "b.txt"], start=1):
                record = _record(name)
                tracker.notify(SyncProgressEvent.BEFORE_COPY, record, index, 2)
                tracker.notify(
                    SyncProgressEvent.AFTER_COPY, record, index, 2, name == "a.txt"
                )
            record = _record("c.txt")
            tracker.notify(SyncProgressEvent.BEFORE_DELETE, record, 1, 1)
            tracker.notify(SyncProgressEvent.AFTER_DELETE, record, 1, 1, True)

            tasks = display._progress.tasks
            assert [task.completed for task in tasks] == [2, 1]
            assert [task.total for task in tasks] == [2, 1]

        assert display.failed == 1

    def test_no_delete_task_without_deletions(self):
        """The delete bar is only shown when files will be deleted."""
        with SyncProgressDisplay(files_to_copy=1) as display:
            assert len(display._progress.tasks) == 1

    def test_tracker_outside_context_is_harmless(self):
        """Notifications before the display starts are ignored."""
        display = SyncProgressDisplay(files_to_copy=1)
        tracker = display.create_tracker()

        tracker.notify(SyncProgressEvent.AFTER_COPY, _record(), 0, 1, False)

        assert display.failed == 1
