from __future__ import annotations

from unittest.mock import Mock, patch

from tracker_import.services.progress import ProgressTracker, is_tty_enabled


def test_is_tty_enabled_returns_stdout_isatty():
    with patch('sys.stdout.isatty', return_value=True):
        assert is_tty_enabled() is True

    with patch('sys.stdout.isatty', return_value=False):
        assert is_tty_enabled() is False


class TestProgressTracker:
    """Test cases for ProgressTracker class."""

    def test_init_with_tty_enabled(self):
        with patch('tracker_import.services.progress.is_tty_enabled', return_value=True), \
             patch('tracker_import.services.progress.tqdm') as mock_tqdm:

            tracker = ProgressTracker(5, description="Importing Anime")

            assert tracker.total_rows == 5
            assert tracker.current_row == 0
            assert tracker.enabled is True
            mock_tqdm.assert_called_once_with(
                total=5,
                desc="Importing Anime",
                unit="row",
                leave=True,
                position=0,
                ncols=80,
                ascii=True,
            )

    def test_init_with_tty_disabled(self):
        with patch('tracker_import.services.progress.is_tty_enabled', return_value=False):
            tracker = ProgressTracker(5)

            assert tracker.enabled is False
            assert tracker.pbar is None

    def test_advance_success(self):
        mock_pbar = Mock()

        with patch('tracker_import.services.progress.is_tty_enabled', return_value=True), \
             patch('tracker_import.services.progress.tqdm', return_value=mock_pbar):

            tracker = ProgressTracker(3, description="Importing")
            tracker.advance()

            assert tracker.current_row == 1
            assert tracker.failed is False
            mock_pbar.update.assert_called_once_with(1)
            mock_pbar.set_description.assert_not_called()

    def test_advance_failure_marks_stop_row(self):
        mock_pbar = Mock()

        with patch('tracker_import.services.progress.is_tty_enabled', return_value=True), \
             patch('tracker_import.services.progress.tqdm', return_value=mock_pbar):

            tracker = ProgressTracker(3, description="Importing")
            tracker.advance()
            tracker.advance(success=False)

            assert tracker.failed is True
            mock_pbar.set_description.assert_called_once_with("Importing (stopped at row 2)")

    def test_advance_with_tty_disabled(self):
        with patch('tracker_import.services.progress.is_tty_enabled', return_value=False):
            tracker = ProgressTracker(3)
            tracker.advance(success=False)

            assert tracker.current_row == 1
            assert tracker.failed is True

    def test_set_postfix(self):
        mock_pbar = Mock()

        with patch('tracker_import.services.progress.is_tty_enabled', return_value=True), \
             patch('tracker_import.services.progress.tqdm', return_value=mock_pbar):

            tracker = ProgressTracker(3)
            tracker.set_postfix(created=2)

            mock_pbar.set_postfix.assert_called_once_with(created=2)

    def test_close_with_tty_enabled(self):
        mock_pbar = Mock()

        with patch('tracker_import.services.progress.is_tty_enabled', return_value=True), \
             patch('tracker_import.services.progress.tqdm', return_value=mock_pbar):

            tracker = ProgressTracker(3)
            tracker.close()
            tracker.close()

            mock_pbar.close.assert_called_once()
            assert tracker.pbar is None

    def test_context_manager(self):
        mock_pbar = Mock()

        with patch('tracker_import.services.progress.is_tty_enabled', return_value=True), \
             patch('tracker_import.services.progress.tqdm', return_value=mock_pbar):

            with ProgressTracker(3) as tracker:
                assert isinstance(tracker, ProgressTracker)

            mock_pbar.close.assert_called_once()
