"""Unit tests for the review session controller."""

import asyncio
from unittest.mock import patch

import pytest
import pytest_check as check

from scholarsight.chat.aggregator import CHAT_UNAVAILABLE_MESSAGE
from scholarsight.chat.context import ChatBootstrap, ChatReady, ChatUnavailable
from scholarsight.chat.transcript import Role
from scholarsight.gemini.review_client import ReviewSchemaError, ReviewTransportError
from scholarsight.ingest.document import UploadedDocument
from scholarsight.models.schemas import ReviewData
from scholarsight.session import ANALYSIS_FAILED_MESSAGE, CHAT_GREETING, AppView, ReviewSession
from tests.fakes import FakeChatContext, FakeReviewClient


class RecordingOpener:
    """Chat opener that hands out a fixed bootstrap and records documents."""

    def __init__(self, bootstrap: ChatBootstrap) -> None:
        self.bootstrap = bootstrap
        self.documents: list[UploadedDocument] = []

    def __call__(self, document: UploadedDocument) -> ChatBootstrap:
        self.documents.append(document)
        return self.bootstrap


@pytest.fixture
def chat_context() -> FakeChatContext:
    return FakeChatContext(["It uses ", "CIFAR-10."])


@pytest.fixture
def opener(chat_context: FakeChatContext) -> RecordingOpener:
    return RecordingOpener(ChatReady(chat_context))


def make_session(review_client, opener) -> tuple[ReviewSession, list[AppView]]:
    views: list[AppView] = []
    session = ReviewSession(
        review_client=review_client,
        chat_opener=opener,
        on_view_change=lambda: views.append(session.view),
    )
    return session, views


class TestAnalyze:
    """Tests for the analysis flow."""

    async def test_successful_analysis_shows_dashboard(
        self,
        fake_review_client: FakeReviewClient,
        opener: RecordingOpener,
        text_document: UploadedDocument,
        review: ReviewData,
    ) -> None:
        session, views = make_session(fake_review_client, opener)

        await session.analyze(text_document)

        check.equal(views, [AppView.ANALYZING, AppView.ANALYZING, AppView.DASHBOARD])
        check.equal(session.review, review)
        check.equal(session.document, text_document)
        check.is_none(session.error_message)
        check.equal(fake_review_client.documents, [text_document])
        check.equal(opener.documents, [text_document])

    async def test_chat_starts_with_greeting(
        self,
        fake_review_client: FakeReviewClient,
        opener: RecordingOpener,
        text_document: UploadedDocument,
    ) -> None:
        session, _ = make_session(fake_review_client, opener)

        await session.analyze(text_document)

        assert session.chat is not None
        messages = session.chat.messages
        check.equal(len(messages), 1)
        check.equal(messages[0].role, Role.MODEL)
        check.equal(messages[0].text, CHAT_GREETING)

    async def test_chat_answers_after_analysis(
        self,
        fake_review_client: FakeReviewClient,
        opener: RecordingOpener,
        chat_context: FakeChatContext,
        text_document: UploadedDocument,
    ) -> None:
        session, _ = make_session(fake_review_client, opener)
        await session.analyze(text_document)
        assert session.chat is not None

        task = session.chat.submit("Which dataset?")
        assert task is not None
        await task

        check.equal(chat_context.received, ["Which dataset?"])
        check.equal(session.chat.messages[-1].text, "It uses CIFAR-10.")

    async def test_schema_failure_shows_error(
        self, opener: RecordingOpener, text_document: UploadedDocument
    ) -> None:
        client = FakeReviewClient(error=ReviewSchemaError("No response text generated"))
        session, views = make_session(client, opener)

        await session.analyze(text_document)

        check.equal(views[-1], AppView.ERROR)
        check.equal(session.error_message, ANALYSIS_FAILED_MESSAGE)
        check.is_none(session.review)

    async def test_transport_failure_shows_error(
        self, opener: RecordingOpener, text_document: UploadedDocument
    ) -> None:
        client = FakeReviewClient(error=ReviewTransportError("Gemini API error 503: overloaded"))
        session, _ = make_session(client, opener)

        await session.analyze(text_document)

        check.equal(session.view, AppView.ERROR)

    async def test_missing_api_key_shows_error(
        self, opener: RecordingOpener, text_document: UploadedDocument
    ) -> None:
        session, _ = make_session(None, opener)

        with patch.dict("os.environ", {}, clear=True):
            await session.analyze(text_document)

        check.equal(session.view, AppView.ERROR)
        check.equal(session.error_message, ANALYSIS_FAILED_MESSAGE)

    async def test_unavailable_chat_does_not_block_review(
        self, fake_review_client: FakeReviewClient, text_document: UploadedDocument
    ) -> None:
        session, _ = make_session(fake_review_client, RecordingOpener(ChatUnavailable("no key")))

        await session.analyze(text_document)
        check.equal(session.view, AppView.DASHBOARD)

        assert session.chat is not None
        task = session.chat.submit("Hello?")
        assert task is not None
        await task

        check.equal(session.chat.messages[-1].text, CHAT_UNAVAILABLE_MESSAGE)


class TestReset:
    """Tests for starting over."""

    async def test_reset_discards_everything(
        self,
        fake_review_client: FakeReviewClient,
        opener: RecordingOpener,
        text_document: UploadedDocument,
    ) -> None:
        session, views = make_session(fake_review_client, opener)
        await session.analyze(text_document)

        session.reset()

        check.equal(views[-1], AppView.UPLOAD)
        check.is_none(session.document)
        check.is_none(session.review)
        check.is_none(session.chat)
        check.is_none(session.error_message)

    async def test_reset_stops_streaming_reply(
        self, fake_review_client: FakeReviewClient, text_document: UploadedDocument
    ) -> None:
        gate = asyncio.Event()
        opener = RecordingOpener(ChatReady(FakeChatContext(["never shown"], gate=gate)))
        session, _ = make_session(fake_review_client, opener)
        await session.analyze(text_document)
        assert session.chat is not None

        task = session.chat.submit("Which dataset?")
        assert task is not None
        await asyncio.sleep(0)
        session.reset()

        with pytest.raises(asyncio.CancelledError):
            await task
        check.is_true(task.cancelled())

    async def test_new_analysis_stops_previous_chat(
        self, fake_review_client: FakeReviewClient, text_document: UploadedDocument
    ) -> None:
        gate = asyncio.Event()
        opener = RecordingOpener(ChatReady(FakeChatContext(["old"], gate=gate)))
        session, _ = make_session(fake_review_client, opener)
        await session.analyze(text_document)
        assert session.chat is not None
        task = session.chat.submit("q")
        assert task is not None
        await asyncio.sleep(0)

        await session.analyze(text_document)

        with pytest.raises(asyncio.CancelledError):
            await task
        check.equal(session.view, AppView.DASHBOARD)

    async def test_reset_after_error(
        self, opener: RecordingOpener, text_document: UploadedDocument
    ) -> None:
        session, _ = make_session(FakeReviewClient(error=ReviewSchemaError("bad")), opener)
        await session.analyze(text_document)

        session.reset()

        check.equal(session.view, AppView.UPLOAD)
        check.is_none(session.error_message)

    def test_new_session_starts_on_upload(self, opener: RecordingOpener) -> None:
        session = ReviewSession(chat_opener=opener)

        check.equal(session.view, AppView.UPLOAD)
        check.is_none(session.chat)
