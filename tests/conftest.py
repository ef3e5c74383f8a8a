"""Shared fixtures: a fake transport and kube client plus resource builders."""

from __future__ import annotations

import queue
from types import SimpleNamespace
from typing import Any
from unittest.mock import Mock

import pytest

BOT_ID = "UBOT123"
MENTION = f"<@{BOT_ID}>"


class FakeTransport:
    """In-memory stand-in for the Slack handler."""

    def __init__(self) -> None:
        self.events: queue.Queue[Any] = queue.Queue()
        self.sent: list[tuple[str, str]] = []

    def mention_token(self) -> str:
        return MENTION

    def send_message(self, channel: str, text: str) -> bool:
        self.sent.append((channel, text))
        return True


# Plain attribute objects shaped like the kubernetes client models, so the
# tests do not depend on which fields a given client release requires.
def make_deployment(name: str) -> SimpleNamespace:
    return SimpleNamespace(metadata=SimpleNamespace(name=name))


def make_container_status(running: bool) -> SimpleNamespace:
    if running:
        state = SimpleNamespace(running=SimpleNamespace(started_at=None), waiting=None, terminated=None)
    else:
        state = SimpleNamespace(running=None, waiting=SimpleNamespace(reason="CrashLoopBackOff"), terminated=None)
    return SimpleNamespace(state=state, ready=running)


def make_pod(name: str, phase: str, running: int, total: int, statuses: bool = True) -> SimpleNamespace:
    container_statuses = [make_container_status(i < running) for i in range(total)] if statuses else None
    return SimpleNamespace(
        metadata=SimpleNamespace(name=name),
        status=SimpleNamespace(phase=phase, container_statuses=container_statuses),
    )


@pytest.fixture
def transport() -> FakeTransport:
    return FakeTransport()


@pytest.fixture
def kube() -> Mock:
    return Mock(spec=["list_deployments", "list_pods"])
