"""Pytest fixtures and shared test configuration.

Fixtures:
    - review_payload: A valid review as the model would return it
    - review: The same review parsed into ReviewData
    - text_document: A small validated plain-text upload
    - fake_review_client: Review client returning the review
    - async_client: HTTPX client for API testing with the fake client
"""

import json
from collections.abc import AsyncGenerator
from typing import Any

import pytest
from httpx import ASGITransport, AsyncClient

from scholarsight.api import app
from scholarsight.gemini.review_client import get_review_client, parse_review
from scholarsight.ingest.document import UploadedDocument, ingest_document
from scholarsight.models.schemas import ReviewData
from tests.fakes import SAMPLE_PAPER, FakeReviewClient


@pytest.fixture
def review_payload() -> dict[str, Any]:
    """Return a review dict in the wire format."""
    return {
        "title": "Deep Residual Learning",
        "authors": ["K. He", "X. Zhang"],
        "summary": "Introduces residual connections for very deep networks.",
        "scores": {
            "novelty": 9,
            "methodology": 8,
            "clarity": 7.5,
            "significance": 9,
            "citations": 6,
        },
        "strengths": ["Simple idea", "Strong results"],
        "weaknesses": ["Limited theory"],
        "detailedFeedback": "Consider adding an ablation on depth.",
        "decision": "Reject",
    }


@pytest.fixture
def review(review_payload: dict[str, Any]) -> ReviewData:
    return parse_review(json.dumps(review_payload))


@pytest.fixture
def text_document() -> UploadedDocument:
    return ingest_document(SAMPLE_PAPER, "text/plain", "paper.txt")


@pytest.fixture
def fake_review_client(review: ReviewData) -> FakeReviewClient:
    return FakeReviewClient(review=review)


@pytest.fixture
async def async_client(fake_review_client: FakeReviewClient) -> AsyncGenerator[AsyncClient]:
    """Create async HTTP client for API testing.

    Yields:
        AsyncClient whose review requests go to fake_review_client.
    """
    app.dependency_overrides[get_review_client] = lambda: fake_review_client
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
    app.dependency_overrides.clear()
