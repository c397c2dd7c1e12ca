"""Chat transcript and streaming reply aggregation.

Responsibilities:
    - Transcript of user and model messages with one in-flight reply
    - Fragment-by-fragment accumulation of streamed replies
    - Idle/streaming state gating new submissions
    - Local conversion of stream failures into a fixed apology

Has no dependency on the model SDK. Any object with a ``stream(text)``
method yielding fragments with a ``text`` attribute can back a chat.
"""

from scholarsight.chat.aggregator import (
    CHAT_ERROR_MESSAGE,
    CHAT_UNAVAILABLE_MESSAGE,
    ChatState,
    StreamingMessageAggregator,
)
from scholarsight.chat.context import ChatBootstrap, ChatContext, ChatReady, ChatUnavailable
from scholarsight.chat.transcript import Message, Role, Transcript, TranscriptError

__all__ = [
    "CHAT_ERROR_MESSAGE",
    "CHAT_UNAVAILABLE_MESSAGE",
    "ChatBootstrap",
    "ChatContext",
    "ChatReady",
    "ChatState",
    "ChatUnavailable",
    "Message",
    "Role",
    "StreamingMessageAggregator",
    "Transcript",
    "TranscriptError",
]
