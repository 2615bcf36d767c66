# Copyright (c) 2025-2026 provide.io llc
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Exception hierarchy for bot sessions."""


class BotError(Exception):
    """Base exception for bedrockbot."""

    pass


class ConfigError(BotError):
    """Configuration could not be loaded or is invalid."""

    pass


class TransportError(BotError, ConnectionError):
    """The transport rejected an operation or is not connected."""

    pass


class InvalidSlotError(BotError, ValueError):
    """Slot index is malformed or out of range."""

    pass


class EmptySlotError(BotError, ValueError):
    """Slot holds no item, so there is nothing to interact with."""

    pass


class SessionNotFoundError(BotError, ValueError):
    """No session is registered under the given id."""

    pass


class SessionLimitError(BotError, RuntimeError):
    """The fleet already holds the maximum number of sessions."""

    pass
