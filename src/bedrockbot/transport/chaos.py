# Copyright (c) 2025-2026 provide.io llc
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Fault-injection transport wrapper (deterministic).

This is used for resilience testing. It wraps a real transport and injects
send failures, decoder noise and disconnects at deterministic intervals so
tests are repeatable.
"""

from __future__ import annotations

import asyncio
import contextlib
import random
from typing import Any

from bedrockbot.constants import BENIGN_ERROR_MARKERS
from bedrockbot.errors import TransportError
from bedrockbot.transport.base import PacketTransport, TransportEvent


class ChaosTransport(PacketTransport):
    def __init__(
        self,
        inner: PacketTransport,
        *,
        seed: int = 1,
        fail_every_n_sends: int = 0,
        noise_every_n_receives: int = 0,
        disconnect_every_n_receives: int = 0,
        max_jitter_ms: int = 0,
        label: str = "chaos",
    ) -> None:
        self._inner = inner
        self._rng = random.Random(int(seed))
        self._fail_send_n = int(fail_every_n_sends or 0)
        self._noise_n = int(noise_every_n_receives or 0)
        self._disconnect_n = int(disconnect_every_n_receives or 0)
        self._max_jitter_ms = int(max_jitter_ms or 0)
        self._label = str(label or "chaos")
        self._tx_count = 0
        self._rx_count = 0

    @property
    def inner(self) -> PacketTransport:
        return self._inner

    async def connect(self, host: str, port: int, **kwargs: Any) -> None:
        await self._inner.connect(host, port, **kwargs)

    async def close(self) -> None:
        await self._inner.close()

    def send(self, name: str, payload: dict[str, Any]) -> None:
        self._tx_count += 1
        if self._fail_send_n > 0 and (self._tx_count % self._fail_send_n) == 0:
            raise TransportError(f"{self._label}: injected send failure on send #{self._tx_count} ({name})")
        self._inner.send(name, payload)

    async def receive(self) -> TransportEvent:
        self._rx_count += 1

        if self._max_jitter_ms > 0:
            await asyncio.sleep(self._rng.uniform(0.0, float(self._max_jitter_ms)) / 1000.0)

        if self._disconnect_n > 0 and (self._rx_count % self._disconnect_n) == 0:
            with contextlib.suppress(Exception):
                await self._inner.close()
            raise TransportError(f"{self._label}: injected disconnect on receive #{self._rx_count}")

        if self._noise_n > 0 and (self._rx_count % self._noise_n) == 0:
            marker = self._rng.choice(BENIGN_ERROR_MARKERS)
            return TransportEvent("error", {"message": f"{marker}: {self._label} injected noise #{self._rx_count}"})

        return await self._inner.receive()

    def is_connected(self) -> bool:
        return self._inner.is_connected()
