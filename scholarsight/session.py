"""Review session controller.

Tracks which view the user sees and owns the objects tied to one uploaded
paper: the document, its review, and the chat aggregator. Starting over
discards all of them together.
"""

import logging
from collections.abc import Callable
from enum import Enum

from scholarsight.chat.aggregator import StreamingMessageAggregator
from scholarsight.chat.context import ChatBootstrap
from scholarsight.gemini.chat_client import open_chat_session
from scholarsight.gemini.config import GeminiConfig
from scholarsight.gemini.review_client import ReviewClient, ReviewError
from scholarsight.ingest.document import UploadedDocument
from scholarsight.models.schemas import ReviewData

logger = logging.getLogger(__name__)

ANALYSIS_FAILED_MESSAGE = (
    "Failed to analyze the paper. Please try again or ensure the file content is valid text/PDF."
)
CHAT_GREETING = (
    "I've analyzed the paper. Ask me anything about the methodology, results, or specific details."
)


class AppView(str, Enum):
    """The view currently shown by the application."""

    UPLOAD = "upload"
    ANALYZING = "analyzing"
    DASHBOARD = "dashboard"
    ERROR = "error"


class ReviewSession:
    """State for one browser session's review workflow."""

    def __init__(
        self,
        review_client: ReviewClient | None = None,
        chat_opener: Callable[[UploadedDocument], ChatBootstrap] = open_chat_session,
        config: GeminiConfig | None = None,
        on_view_change: Callable[[], None] | None = None,
        on_chat_update: Callable[[], None] | None = None,
    ) -> None:
        """Initialize the session.

        Args:
            review_client: Client for the structured review. Created on first
                use if not provided.
            chat_opener: Opens the chat session for a document.
            config: Gemini configuration used for the chat stream timeout.
            on_view_change: Called whenever ``view`` changes.
            on_chat_update: Forwarded to each chat aggregator.
        """
        self._review_client = review_client
        self._chat_opener = chat_opener
        self._config = config
        self._on_view_change = on_view_change
        self._on_chat_update = on_chat_update

        self.view = AppView.UPLOAD
        self.document: UploadedDocument | None = None
        self.review: ReviewData | None = None
        self.chat: StreamingMessageAggregator | None = None
        self.error_message: str | None = None
        self.loading_step = "Initializing..."

    def _fragment_timeout(self) -> float | None:
        return self._config.stream_timeout if self._config else None

    def _show(self, view: AppView) -> None:
        self.view = view
        if self._on_view_change is not None:
            self._on_view_change()

    async def analyze(self, document: UploadedDocument) -> None:
        """Open the chat and generate the review for a new document.

        Failures move the session to the error view instead of raising.
        """
        self._clear()
        self.document = document
        self.loading_step = "Reading paper content..."
        self._show(AppView.ANALYZING)

        self.chat = StreamingMessageAggregator(
            self._chat_opener(document),
            greeting=CHAT_GREETING,
            on_update=self._on_chat_update,
            fragment_timeout=self._fragment_timeout(),
        )

        self.loading_step = "Analyzing methodology and significance..."
        self._show(AppView.ANALYZING)
        try:
            client = self._review_client or ReviewClient(config=self._config)
            self.review = await client.generate_review(document)
        except ReviewError as e:
            logger.error(f"Analysis failed for {document.name}: {e}")
            self.error_message = ANALYSIS_FAILED_MESSAGE
            self._show(AppView.ERROR)
            return

        self._show(AppView.DASHBOARD)

    def _clear(self) -> None:
        if self.chat is not None:
            self.chat.close()
        self.document = None
        self.review = None
        self.chat = None
        self.error_message = None
        self.loading_step = "Initializing..."

    def reset(self) -> None:
        """Discard the current document, review and chat."""
        self._clear()
        self._show(AppView.UPLOAD)
