"""Single-consumer loop that answers chat commands with cluster state."""

import logging

from mibot.commands import FALLBACK_TEXT, HELP, HELP_TEXT, LIST_DEPLOYMENTS, LIST_PODS, match_command
from mibot.events import (
    ChatEvent,
    ConnectedEvent,
    InvalidAuthEvent,
    LatencyReport,
    MessageEvent,
    PresenceChangeEvent,
    TransportError,
)
from mibot.tools.k8s_tools import KubeQueryError, format_deployments, format_pods

logger = logging.getLogger(__name__)


class Dispatcher:
    """Consumes chat events one at a time and replies to messages that mention the bot.

    The transport must provide an ``events`` queue, ``mention_token()`` and
    ``send_message(channel, text)``; the kube client must provide
    ``list_deployments(namespace)`` and ``list_pods(namespace)``.
    """

    def __init__(self, transport, kube, bot_name: str = "mibot"):
        self.transport = transport
        self.kube = kube
        self.bot_name = bot_name

    def run(self) -> None:
        """Handle events in arrival order until credentials are rejected."""
        while True:
            event = self.transport.events.get()
            if not self.handle(event):
                break
        logger.info("Dispatcher stopped")

    def handle(self, event: ChatEvent) -> bool:
        """Handle one event. Returns False when the loop must stop."""
        if isinstance(event, MessageEvent):
            self.handle_message(event)
        elif isinstance(event, ConnectedEvent):
            logger.info(f"Connected as {event.user_id}")
        elif isinstance(event, PresenceChangeEvent):
            logger.info(f"Presence Change: {event.user} is {event.presence}")
        elif isinstance(event, LatencyReport):
            logger.info(f"Current latency: {event.value:.3f}s")
        elif isinstance(event, TransportError):
            logger.error(f"Error: {event.message}")
        elif isinstance(event, InvalidAuthEvent):
            logger.error("Invalid credentials")
            return False
        else:
            logger.debug(f"Ignoring unexpected event: {event!r}")
        return True

    def handle_message(self, event: MessageEvent) -> None:
        if self.transport.mention_token() not in event.text:
            return

        reply = self.reply_for(event.text)
        logger.debug(f"Reply for channel {event.channel}:\n{reply}")
        self.transport.send_message(event.channel, reply)

    def reply_for(self, text: str) -> str:
        """Build the reply text for a message addressed to the bot."""
        command = match_command(text)

        if command.name == LIST_DEPLOYMENTS:
            namespace = command.args["namespace"]
            logger.info(f"Listing deployments in namespace '{namespace}'")
            try:
                return format_deployments(self.kube.list_deployments(namespace))
            except KubeQueryError as e:
                logger.error(f"Error listing deployments in '{namespace}': {e}")
                return f"error: {e.cause}"

        if command.name == LIST_PODS:
            namespace = command.args["namespace"]
            logger.info(f"Listing pods in namespace '{namespace}'")
            try:
                return format_pods(self.kube.list_pods(namespace))
            except KubeQueryError as e:
                logger.error(f"Error listing pods in '{namespace}': {e}")
                return f"error: {e.cause}"

        if command.name == HELP:
            return HELP_TEXT

        return FALLBACK_TEXT.format(bot_name=self.bot_name)
