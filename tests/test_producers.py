"""Tests for content producers and the frame loop."""

import threading
from unittest.mock import Mock

import pytest

from ledgrid.compositor import CornerTestPattern, FrameLoop, LedGrid, SolidColor


@pytest.fixture
def mock_grid(small_layout):
    channels = []
    for _ in small_layout.panels:
        channel = Mock()
        channel.send_frame.return_value = True
        channels.append(channel)
    return LedGrid(small_layout, channels=channels)


@pytest.mark.unit
class TestProducers:
    """Test the built-in patterns."""

    def test_corner_pattern(self, mock_grid):
        CornerTestPattern().render(mock_grid, 100, 50)

        for index in range(2):
            assert mock_grid.get_color(index, 0, 0) == (255, 0, 0)
            assert mock_grid.get_color(index, 3, 0) == (0, 255, 0)
            assert mock_grid.get_color(index, 0, 3) == (0, 0, 255)
            assert mock_grid.get_color(index, 3, 3) == (255, 255, 0)
            assert mock_grid.get_color(index, 1, 1) == (0, 0, 0)

    def test_corner_pattern_clears_previous_frame(self, mock_grid):
        mock_grid.set_color(0, 2, 2, (9, 9, 9))
        CornerTestPattern().render(mock_grid, 100, 50)
        assert mock_grid.get_color(0, 2, 2) == (0, 0, 0)

    def test_solid_color(self, mock_grid):
        SolidColor((1, 2, 300)).render(mock_grid, 100, 50)
        assert mock_grid.get_color(1, 3, 2) == (1, 2, 255)
        assert mock_grid.get_color(0, 0, 0) == (1, 2, 255)


@pytest.mark.unit
class TestFrameLoop:
    """Test the fixed-cadence driver."""

    def test_run_frames(self, mock_grid):
        producer = Mock()
        loop = FrameLoop(mock_grid, producer, fps=1000)

        assert loop.run_frames(3) == 3

        assert producer.render.call_count == 3
        producer.render.assert_called_with(mock_grid, 100, 50)
        assert mock_grid.get_channel(0).send_frame.call_count == 3
        assert mock_grid.frame_count == 3

    def test_run_for_zero_seconds(self, mock_grid):
        loop = FrameLoop(mock_grid, Mock(), fps=60)
        assert loop.run_for(0) == 0

    def test_failed_frames_are_counted(self, mock_grid):
        mock_grid.get_channel(1).send_frame.return_value = False
        loop = FrameLoop(mock_grid, Mock(), fps=1000)

        loop.run_frames(2)

        assert loop.failed_frames == 2

    def test_stop_from_producer(self, mock_grid):
        producer = Mock()
        loop = FrameLoop(mock_grid, producer, fps=1000)
        producer.render.side_effect = lambda *args: loop.stop()

        assert loop.run_frames(100) == 1
        assert loop.is_stopped

    def test_stop_from_another_thread(self, mock_grid):
        loop = FrameLoop(mock_grid, Mock(), fps=100)
        timer = threading.Timer(0.05, loop.stop)
        timer.start()

        sent = loop.run_for(10.0)

        timer.join()
        assert 0 < sent < 1000

    def test_invalid_fps(self, mock_grid):
        with pytest.raises(ValueError):
            FrameLoop(mock_grid, Mock(), fps=0)
