"""Tests for the destination free space check."""

from pathlib import Path
from unittest.mock import Mock, patch

import pytest

from pymirror.sync.space import SpaceGuard
from pymirror.utils import RESERVE_MARGIN

MIB = 1024 * 1024


@pytest.fixture
def guard():
    return SpaceGuard(Path("/mnt/backup"))


class TestSpaceGuard:
    """Tests for SpaceGuard."""

    def test_reserve_margin_is_ten_mib(self, guard):
        """The default safety buffer is 10 MiB."""
        assert RESERVE_MARGIN == 10 * MIB
        assert guard.reserve_margin == 10 * MIB

    @patch("pymirror.sync.space.shutil.disk_usage")
    def test_plenty_of_space(self, mock_disk_usage, guard):
        """A small copy fits on a large volume."""
        mock_disk_usage.return_value = Mock(free=500 * MIB)

        assert guard.has_enough_space(100 * MIB)
        mock_disk_usage.assert_called_once_with(Path("/mnt/backup"))

    @patch("pymirror.sync.space.shutil.disk_usage")
    def test_boundary_passes(self, mock_disk_usage, guard):
        """Free space equal to total minus margin passes."""
        free = 50 * MIB
        mock_disk_usage.return_value = Mock(free=free)

        assert guard.has_enough_space(free + RESERVE_MARGIN)

    @patch("pymirror.sync.space.shutil.disk_usage")
    def test_one_byte_below_boundary_fails(self, mock_disk_usage, guard):
        """Free space one byte below total minus margin fails."""
        free = 50 * MIB
        mock_disk_usage.return_value = Mock(free=free)

        assert not guard.has_enough_space(free + RESERVE_MARGIN + 1)

    @patch("pymirror.sync.space.shutil.disk_usage")
    def test_nothing_to_copy(self, mock_disk_usage, guard):
        """An empty copy set always passes."""
        mock_disk_usage.return_value = Mock(free=0)

        assert guard.has_enough_space(0)

    @patch("pymirror.sync.space.shutil.disk_usage")
    def test_unresolvable_volume_counts_as_zero(self, mock_disk_usage, guard):
        """When free space cannot be read the check fails closed."""
        mock_disk_usage.side_effect = FileNotFoundError("no such volume")

        assert guard.free_space() == 0
        assert not guard.has_enough_space(RESERVE_MARGIN + 1)

    @patch("pymirror.sync.space.shutil.disk_usage")
    def test_custom_margin(self, mock_disk_usage):
        """A custom margin shifts the boundary."""
        mock_disk_usage.return_value = Mock(free=100)
        guard = SpaceGuard(Path("/mnt/backup"), reserve_margin=0)

        assert guard.has_enough_space(100)
        assert not guard.has_enough_space(101)

    def test_real_volume(self, tmp_path):
        """The guard reads free space from the actual filesystem."""
        guard = SpaceGuard(tmp_path)

        assert guard.free_space() > 0
        assert guard.has_enough_space(1)
