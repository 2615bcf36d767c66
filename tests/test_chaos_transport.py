from __future__ import annotations

from typing import Any

import pytest

from bedrockbot.constants import BENIGN_ERROR_MARKERS
from bedrockbot.transport.base import PacketTransport, TransportEvent
from bedrockbot.transport.chaos import ChaosTransport


class DummyTransport(PacketTransport):
    def __init__(self) -> None:
        self.connected = False
        self.rx_calls = 0
        self.sent: list[str] = []

    async def connect(self, host: str, port: int, **kwargs: Any) -> None:
        self.connected = True

    async def close(self) -> None:
        self.connected = False

    def send(self, name: str, payload: dict[str, Any]) -> None:
        if not self.connected:
            raise ConnectionError("Not connected")
        self.sent.append(name)

    async def receive(self) -> TransportEvent:
        if not self.connected:
            raise ConnectionError("Not connected")
        self.rx_calls += 1
        return TransportEvent("text", {"message": "hello"})

    def is_connected(self) -> bool:
        return self.connected


@pytest.mark.asyncio
async def test_chaos_disconnect_every_n_receives() -> None:
    inner = DummyTransport()
    transport = ChaosTransport(inner, seed=1, disconnect_every_n_receives=2, label="t")
    await transport.connect("x", 1)

    event = await transport.receive()
    assert event.name == "text"
    assert inner.is_connected()

    with pytest.raises(ConnectionError):
        await transport.receive()
    assert not inner.is_connected()


@pytest.mark.asyncio
async def test_chaos_noise_every_n_receives_is_benign_error() -> None:
    inner = DummyTransport()
    transport = ChaosTransport(inner, seed=1, noise_every_n_receives=1, label="t")
    await transport.connect("x", 1)

    event = await transport.receive()
    assert event.name == "error"
    assert any(marker in event.params["message"] for marker in BENIGN_ERROR_MARKERS)
    assert inner.rx_calls == 0
    assert inner.is_connected()


@pytest.mark.asyncio
async def test_chaos_fail_every_n_sends() -> None:
    inner = DummyTransport()
    transport = ChaosTransport(inner, seed=1, fail_every_n_sends=2, label="t")
    await transport.connect("x", 1)

    transport.send("command_request", {})
    with pytest.raises(ConnectionError):
        transport.send("inventory_transaction", {})
    transport.send("command_request", {})

    assert inner.sent == ["command_request", "command_request"]


@pytest.mark.asyncio
async def test_chaos_passthrough_when_disabled() -> None:
    inner = DummyTransport()
    transport = ChaosTransport(inner)
    await transport.connect("x", 1)

    for _ in range(5):
        assert (await transport.receive()).name == "text"
    assert transport.inner is inner
    await transport.close()
    assert not transport.is_connected()
