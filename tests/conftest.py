"""Pytest fixtures for tests."""

import socket
from pathlib import Path
from tempfile import TemporaryDirectory
from unittest.mock import Mock

import pytest

from ledgrid.models import AppConfig, LayoutModel, PanelGeometry


class FakeSocketFactory:
    """Socket factory handing out Mock sockets that record sendto() calls."""

    def __init__(self, fail: bool = False):
        self.fail = fail
        self.sockets: list[Mock] = []

    def __call__(self, family, type_):
        sock = Mock(spec=socket.socket)
        if self.fail:
            sock.sendto.side_effect = OSError("Network is unreachable")
        self.sockets.append(sock)
        return sock

    def sent(self, index: int = 0) -> list[bytes]:
        """Packets sent on the index-th socket created."""
        return [call.args[0] for call in self.sockets[index].sendto.call_args_list]


class FakeClock:
    """Manually advanced monotonic clock."""

    def __init__(self, start: float = 0.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def temp_dir():
    """Create a temporary directory that gets cleaned up."""
    with TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def socket_factory():
    return FakeSocketFactory()


@pytest.fixture
def failing_socket_factory():
    return FakeSocketFactory(fail=True)


@pytest.fixture
def clock():
    return FakeClock(start=100.0)


@pytest.fixture
def fast_config(temp_dir):
    """Config with no rate limiting and no turn-off delay."""
    return AppConfig(
        min_send_interval=0.0,
        turn_off_interval=0.0,
        layouts_dir=temp_dir / "layouts",
    )


@pytest.fixture
def one_panel_layout():
    return LayoutModel(
        name="Single",
        window_width=300,
        window_height=300,
        panels=[PanelGeometry(id="A", device_ip="10.0.0.1", x=30, y=30, width=240, height=240)],
    )


@pytest.fixture
def two_panel_layout():
    """Two 16x16 panels side by side; the first is mirrored."""
    return LayoutModel(
        name="Pair",
        window_width=540,
        window_height=330,
        panels=[
            PanelGeometry(id="Grid01", device_ip="10.0.0.1", x=20, y=45, width=240, height=240, mirror=True),
            PanelGeometry(id="Grid02", device_ip="10.0.0.2", x=280, y=45, width=240, height=240),
        ],
    )


@pytest.fixture
def small_layout():
    """Two 4x4 panels with 10px cells, easy to reason about."""
    return LayoutModel(
        name="Small",
        window_width=100,
        window_height=50,
        panels=[
            PanelGeometry(id="left", device_ip="10.0.0.1", x=0, y=0, width=40, height=40,
                          grid_size=4, pixel_size=10),
            PanelGeometry(id="right", device_ip="10.0.0.2", x=50, y=0, width=40, height=40,
                          grid_size=4, pixel_size=10, mirror=True),
        ],
    )
