# Copyright (c) 2025-2026 provide.io llc
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Abstract base class for packet transports."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True)
class TransportEvent:
    """One decoded inbound packet or transport pseudo-event (kick/error/close)."""

    name: str
    params: dict[str, Any] = field(default_factory=dict)


class PacketTransport(ABC):
    """Abstract base for a decoded, named-packet connection.

    The codec and the network layer live behind this interface; the
    controller only sees named packets with structured fields.
    """

    @abstractmethod
    async def connect(self, host: str, port: int, **kwargs: Any) -> None:
        """Establish connection and start the login handshake.

        Args:
            host: Remote hostname or IP address
            port: Remote port number
            **kwargs: Transport-specific options (username, version, ...)

        Raises:
            ConnectionError: If connection fails
            asyncio.TimeoutError: If connection times out
        """

    @abstractmethod
    async def close(self) -> None:
        """Close connection and cleanup resources.

        Should be idempotent - safe to call multiple times.
        """

    @abstractmethod
    def send(self, name: str, payload: dict[str, Any]) -> None:
        """Queue one outbound packet.

        Args:
            name: Packet name
            payload: Packet fields

        Raises:
            ConnectionError: If not connected or the packet is rejected
        """

    @abstractmethod
    async def receive(self) -> TransportEvent:
        """Wait for the next inbound event, in arrival order.

        Raises:
            ConnectionError: Once the connection is gone
        """

    @abstractmethod
    def is_connected(self) -> bool:
        """Check if connection is active.

        Returns:
            True if connected, False otherwise
        """
