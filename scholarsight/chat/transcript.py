"""Conversation transcript with a single in-flight model reply.

Messages are immutable. The transcript replaces the last entry whenever the
in-flight reply grows, so readers never observe a partially written message.
"""

import uuid
from datetime import datetime
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class Role(str, Enum):
    """Author of a transcript message."""

    USER = "user"
    MODEL = "model"


class Message(BaseModel):
    """A single chat message.

    Attributes:
        id: Unique identifier, stable for the lifetime of the entry.
        role: Who wrote the message.
        text: Message content. Grows while a model reply streams.
        created_at: Capture time, informational only.
    """

    model_config = ConfigDict(frozen=True)

    id: str = Field(default_factory=lambda: uuid.uuid4().hex)
    role: Role
    text: str = ""
    created_at: datetime = Field(default_factory=datetime.now)


class TranscriptError(Exception):
    """Raised when a mutation would break transcript invariants."""

    pass


class Transcript:
    """Ordered, append-only list of messages.

    Only the last entry may be in flight, and only if it is a model reply.
    Every mutation bumps ``version`` so renderers can detect changes.
    """

    def __init__(self) -> None:
        self._messages: list[Message] = []
        self._in_flight = False
        self._version = 0

    @property
    def messages(self) -> tuple[Message, ...]:
        return tuple(self._messages)

    @property
    def version(self) -> int:
        return self._version

    @property
    def in_flight(self) -> Message | None:
        """The reply currently accumulating fragments, if any."""
        return self._messages[-1] if self._in_flight else None

    def __len__(self) -> int:
        return len(self._messages)

    def _bump(self) -> None:
        self._version += 1

    def append(self, role: Role, text: str) -> Message:
        """Append a completed message.

        Raises:
            TranscriptError: If a reply is still in flight.
        """
        if self._in_flight:
            raise TranscriptError("Cannot append while a reply is in flight")
        message = Message(role=role, text=text)
        self._messages.append(message)
        self._bump()
        return message

    def open_reply(self) -> Message:
        """Append an empty model placeholder and mark it in flight."""
        if self._in_flight:
            raise TranscriptError("A reply is already in flight")
        message = Message(role=Role.MODEL)
        self._messages.append(message)
        self._in_flight = True
        self._bump()
        return message

    def write_reply(self, text: str) -> Message:
        """Replace the in-flight reply's text with a longer accumulation.

        Raises:
            TranscriptError: If nothing is in flight or ``text`` does not
                extend the current text.
        """
        current = self.in_flight
        if current is None:
            raise TranscriptError("No reply in flight")
        if not text.startswith(current.text):
            raise TranscriptError("Reply text may only grow")
        updated = current.model_copy(update={"text": text})
        self._messages[-1] = updated
        self._bump()
        return updated

    def finalize_reply(self, text: str | None = None) -> Message:
        """Freeze the in-flight reply, optionally replacing its whole text."""
        current = self.in_flight
        if current is None:
            raise TranscriptError("No reply in flight")
        if text is not None:
            current = current.model_copy(update={"text": text})
            self._messages[-1] = current
        self._in_flight = False
        self._bump()
        return current
