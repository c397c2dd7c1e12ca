"""Streaming message aggregation for the paper chat.

Turns the fragment stream of one chat turn into a single transcript entry
that grows in place, one turn at a time.

Submission flow:
    1. ``submit`` appends the user message and an empty model placeholder,
       then schedules the consumption loop on the running event loop.
    2. Each fragment's text is appended to a local accumulator and the full
       accumulation is written into the placeholder.
    3. After every write the ``on_update`` callback fires so the UI can
       re-render and scroll to the latest message.
    4. When the stream ends the placeholder is finalized. On any failure its
       text is replaced with a fixed apology and the error is logged.
"""

import asyncio
import logging
from collections.abc import AsyncIterator, Callable
from dataclasses import dataclass
from enum import Enum

from scholarsight.chat.context import ChatBootstrap, ChatUnavailable, Fragment
from scholarsight.chat.transcript import Message, Role, Transcript

logger = logging.getLogger(__name__)

CHAT_ERROR_MESSAGE = "Sorry, I encountered an error responding to your question."
CHAT_UNAVAILABLE_MESSAGE = "Error: Chat service unavailable."


class ChatState(str, Enum):
    """Whether a reply is currently streaming."""

    IDLE = "idle"
    STREAMING = "streaming"


@dataclass(frozen=True)
class _TextFragment:
    text: str | None


class StreamingMessageAggregator:
    """Owns a chat transcript and feeds streamed replies into it.

    Only one reply streams at a time. Submissions made while streaming,
    with blank text, or without a bootstrap are ignored.
    """

    def __init__(
        self,
        bootstrap: ChatBootstrap | None,
        *,
        greeting: str | None = None,
        on_update: Callable[[], None] | None = None,
        fragment_timeout: float | None = None,
    ) -> None:
        """Initialize the aggregator.

        Args:
            bootstrap: Result of opening the chat session.
            greeting: Optional model message shown before the first turn.
            on_update: Called after every transcript change. Best effort.
            fragment_timeout: Seconds to wait for each fragment (None = no limit).
        """
        self._bootstrap = bootstrap
        self._on_update = on_update
        self._fragment_timeout = fragment_timeout
        self._transcript = Transcript()
        self._state = ChatState.IDLE
        self._task: asyncio.Task[None] | None = None

        if greeting:
            self._transcript.append(Role.MODEL, greeting)

    @property
    def transcript(self) -> Transcript:
        return self._transcript

    @property
    def messages(self) -> tuple[Message, ...]:
        return self._transcript.messages

    @property
    def state(self) -> ChatState:
        return self._state

    @property
    def is_busy(self) -> bool:
        return self._state is ChatState.STREAMING

    @property
    def is_typing(self) -> bool:
        """Streaming and no text has arrived for the reply yet."""
        current = self._transcript.in_flight
        return self.is_busy and current is not None and not current.text

    def submit(self, user_text: str) -> asyncio.Task[None] | None:
        """Send a user turn and start streaming the reply.

        Must be called from a running event loop.

        Args:
            user_text: The user's message.

        Returns:
            The task consuming the reply stream, or None if ignored.
        """
        if not user_text or not user_text.strip():
            logger.debug("Ignoring blank submission")
            return None
        if self._state is not ChatState.IDLE:
            logger.debug("Ignoring submission while a reply is streaming")
            return None
        if self._bootstrap is None:
            logger.debug("Ignoring submission without a chat session")
            return None

        self._transcript.append(Role.USER, user_text)
        self._transcript.open_reply()
        self._state = ChatState.STREAMING
        self._notify()

        self._task = asyncio.create_task(self._consume(user_text))
        return self._task

    def close(self) -> None:
        """Stop any streaming reply and detach the update callback.

        Later transcript changes are no longer reported through ``on_update``.
        """
        self._on_update = None
        if self._task is not None and not self._task.done():
            self._task.cancel()

    async def _consume(self, user_text: str) -> None:
        accumulated = ""
        failed = False
        try:
            async for fragment in self._fragments(user_text):
                accumulated += getattr(fragment, "text", None) or ""
                self._transcript.write_reply(accumulated)
                self._notify()
        except Exception:
            logger.exception("Chat stream failed")
            failed = True
        finally:
            self._transcript.finalize_reply(CHAT_ERROR_MESSAGE if failed else None)
            self._state = ChatState.IDLE
            self._notify()

    async def _fragments(self, user_text: str) -> AsyncIterator[Fragment]:
        if isinstance(self._bootstrap, ChatUnavailable):
            yield _TextFragment(CHAT_UNAVAILABLE_MESSAGE)
            return

        iterator = aiter(self._bootstrap.context.stream(user_text))
        while True:
            try:
                fragment = await asyncio.wait_for(anext(iterator), self._fragment_timeout)
            except StopAsyncIteration:
                return
            yield fragment

    def _notify(self) -> None:
        if self._on_update is None:
            return
        try:
            self._on_update()
        except Exception:
            logger.exception("Chat update callback failed")
