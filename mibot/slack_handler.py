"""Slack transport: turns socket-mode deliveries into a queue of chat events."""

import logging
import queue
import time
from typing import Optional

from slack_bolt import App
from slack_bolt.adapter.socket_mode import SocketModeHandler
from slack_sdk.errors import SlackApiError

from mibot.events import (
    ChatEvent,
    ConnectedEvent,
    InvalidAuthEvent,
    LatencyReport,
    MessageEvent,
    PresenceChangeEvent,
    TransportError,
)

logger = logging.getLogger(__name__)

# auth.test errors that mean the token itself is unusable
INVALID_AUTH_ERRORS = {"invalid_auth", "not_authed", "account_inactive", "token_revoked"}

# Edits, deletions and bot posts; other subtypes such as file_share are user messages
SKIPPED_SUBTYPES = {"message_changed", "message_deleted", "bot_message"}


class SlackHandler:
    """Connects to Slack over socket mode and feeds incoming events to a queue."""

    def __init__(self, bot_token: str, app_token: str, debug: bool = False,
                 app: Optional[App] = None):
        """Initialize the Slack app and register event listeners."""
        self.slack_logger = logging.getLogger("slack-bot")
        if debug:
            self.slack_logger.setLevel(logging.DEBUG)

        self.app = app or App(
            token=bot_token,
            logger=self.slack_logger,
            token_verification_enabled=False,
        )
        self.app_token = app_token
        self.bot_user_id: Optional[str] = None
        self.socket_handler: Optional[SocketModeHandler] = None

        # Single unbounded channel between the socket-mode threads and the dispatcher
        self.events: "queue.Queue[ChatEvent]" = queue.Queue()

        self._register_handlers()

    def _register_handlers(self):
        """Register Slack event handlers."""
        self.app.middleware(self.record_latency)
        self.app.event("message")(self.on_message)
        self.app.event("app_mention")(self.on_app_mention)
        self.app.event("presence_change")(self.on_presence_change)
        self.app.event("tokens_revoked")(self.on_tokens_revoked)
        self.app.error(self.on_error)

    def record_latency(self, body, next):
        event_time = body.get("event_time") if isinstance(body, dict) else None
        if event_time:
            self.events.put(LatencyReport(value=time.time() - float(event_time)))
        return next()

    def on_message(self, event):
        """Queue messages written by users."""
        subtype = event.get("subtype")
        if subtype in SKIPPED_SUBTYPES:
            logger.debug(f"Skipping message with subtype: {subtype}")
            return

        user = event.get("user", "")
        if event.get("bot_id") or (user and user == self.bot_user_id):
            logger.debug("Skipping message from a bot")
            return

        self.events.put(MessageEvent(
            text=event.get("text", ""),
            channel=event.get("channel", ""),
            user=user,
        ))

    def on_app_mention(self, event):
        # Mentions also arrive as message events, which is where they are handled
        logger.debug(f"App mention in channel {event.get('channel', '')}")

    def on_presence_change(self, event):
        self.events.put(PresenceChangeEvent(
            user=event.get("user", ""),
            presence=event.get("presence", ""),
        ))

    def on_tokens_revoked(self, event):
        logger.warning("Slack reported revoked tokens")
        self.events.put(InvalidAuthEvent())

    def on_error(self, error):
        self.events.put(TransportError(message=str(error)))

    def connect(self) -> bool:
        """Authenticate, then start the socket-mode connection in the background.

        Returns:
            False when Slack rejected the credentials. An InvalidAuthEvent is
            queued in that case so the dispatcher stops.
        """
        try:
            auth = self.app.client.auth_test()
        except SlackApiError as e:
            error = e.response.get("error", "") if e.response is not None else ""
            if error in INVALID_AUTH_ERRORS:
                logger.error(f"Slack rejected the bot token: {error}")
                self.events.put(InvalidAuthEvent())
                return False
            raise

        self.bot_user_id = auth["user_id"]
        logger.info(f"Bot user ID: {self.bot_user_id}")

        self.socket_handler = SocketModeHandler(self.app, self.app_token, logger=self.slack_logger)
        self.socket_handler.connect()
        self.events.put(ConnectedEvent(user_id=self.bot_user_id))
        return True

    def mention_token(self) -> str:
        """Text fragment Slack uses when a message mentions the bot."""
        return f"<@{self.bot_user_id}>"

    def send_message(self, channel: str, text: str) -> bool:
        try:
            self.app.client.chat_postMessage(channel=channel, text=text)
        except SlackApiError as e:
            logger.error(f"Error sending message to {channel}: {e}")
            return False
        return True

    def close(self):
        if self.socket_handler is not None:
            self.socket_handler.close()
            self.socket_handler = None
