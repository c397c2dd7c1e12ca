"""Conversational context contract and the bootstrap result type."""

from collections.abc import AsyncIterator
from dataclasses import dataclass
from typing import Protocol


class Fragment(Protocol):
    """One incremental piece of a streamed reply. ``text`` may be None."""

    text: str | None


class ChatContext(Protocol):
    """A stateful conversation that streams replies to new user turns."""

    def stream(self, text: str) -> AsyncIterator[Fragment]: ...


@dataclass(frozen=True)
class ChatReady:
    """Bootstrap succeeded; ``context`` is ready to receive turns."""

    context: ChatContext


@dataclass(frozen=True)
class ChatUnavailable:
    """Bootstrap failed; ``reason`` is kept for diagnostics."""

    reason: str


ChatBootstrap = ChatReady | ChatUnavailable
