"""Chat events delivered by the transport to the dispatcher."""

from dataclasses import dataclass
from typing import Union


@dataclass(frozen=True)
class ConnectedEvent:
    """The transport is connected and knows the bot's own user id."""
    user_id: str


@dataclass(frozen=True)
class MessageEvent:
    text: str
    channel: str
    user: str = ""


@dataclass(frozen=True)
class PresenceChangeEvent:
    user: str
    presence: str


@dataclass(frozen=True)
class LatencyReport:
    """Seconds between Slack emitting an event and the bot receiving it."""
    value: float


@dataclass(frozen=True)
class TransportError:
    message: str


@dataclass(frozen=True)
class InvalidAuthEvent:
    """Credentials were rejected or revoked; the dispatch loop stops on this."""


ChatEvent = Union[
    ConnectedEvent,
    MessageEvent,
    PresenceChangeEvent,
    LatencyReport,
    TransportError,
    InvalidAuthEvent,
]
