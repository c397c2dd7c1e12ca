"""Chat session bootstrap via the Gemini API.

Opens a conversation seeded with the paper so every user question is
grounded in the document before the first user-authored turn.
"""

import logging
from collections.abc import AsyncIterator

from google import genai
from google.genai import chats, types

from scholarsight.chat.context import ChatBootstrap, ChatReady, ChatUnavailable, Fragment
from scholarsight.gemini.config import GeminiConfig, get_gemini_config
from scholarsight.gemini.prompts import (
    CHAT_ACKNOWLEDGEMENT,
    CHAT_PRIMING_TEXT,
    SYSTEM_INSTRUCTION_CHAT,
)
from scholarsight.ingest.document import UploadedDocument

logger = logging.getLogger(__name__)


class GeminiChatContext:
    """Adapts an SDK chat to the ChatContext contract."""

    def __init__(self, chat: chats.AsyncChat) -> None:
        self._chat = chat

    async def stream(self, text: str) -> AsyncIterator[Fragment]:
        """Send one user turn and yield the reply chunks as they arrive.

        Each chunk exposes ``text``, which may be None for chunks that carry
        only metadata.
        """
        response = await self._chat.send_message_stream(text)
        async for chunk in response:
            yield chunk


def seed_history(document: UploadedDocument) -> list[types.Content]:
    """Build the two turns that ground the chat in the document."""
    return [
        types.Content(
            role="user",
            parts=[
                types.Part.from_bytes(data=document.raw_bytes(), mime_type=document.mime_type),
                types.Part.from_text(text=CHAT_PRIMING_TEXT),
            ],
        ),
        types.Content(
            role="model",
            parts=[types.Part.from_text(text=CHAT_ACKNOWLEDGEMENT)],
        ),
    ]


def open_chat_session(
    document: UploadedDocument,
    config: GeminiConfig | None = None,
    client: genai.Client | None = None,
) -> ChatBootstrap:
    """Open a chat session pre-seeded with the paper.

    Never raises: configuration or client failures produce ChatUnavailable.

    Args:
        document: The validated, base64-encoded upload.
        config: Optional Gemini configuration.
                Loads from environment if not provided.
        client: Optional pre-built SDK client.

    Returns:
        ChatReady with a usable context, or ChatUnavailable with the reason.
    """
    try:
        config = config or get_gemini_config()
        client = client or genai.Client(api_key=config.api_key)
        chat = client.aio.chats.create(
            model=config.chat_model,
            config=types.GenerateContentConfig(
                system_instruction=SYSTEM_INSTRUCTION_CHAT,
                temperature=config.temperature,
            ),
            history=seed_history(document),
        )
    except Exception as e:
        logger.error(f"Chat service could not be initialized: {e}")
        return ChatUnavailable(reason=str(e))

    logger.info(f"Opened chat session for {document.name}")
    return ChatReady(context=GeminiChatContext(chat))
