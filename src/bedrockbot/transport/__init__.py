# Copyright (c) 2025-2026 provide.io llc
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Transport layer for packet connections."""

from __future__ import annotations

from bedrockbot.transport.base import PacketTransport, TransportEvent
from bedrockbot.transport.chaos import ChaosTransport

__all__ = ["ChaosTransport", "PacketTransport", "TransportEvent"]
