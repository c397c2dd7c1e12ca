"""Unit tests for the review page rendering helpers."""

import pytest_check as check

from scholarsight.models.schemas import Decision, ReviewData
from scholarsight.ui.formatting import (
    author_line,
    decision_badge_classes,
    is_plain_enter,
    markdown_to_html,
    score_rows,
)


class TestScoreRows:
    """Tests for the score chart rows."""

    def test_five_rows_in_fixed_order(self, review: ReviewData) -> None:
        rows = score_rows(review.scores)

        check.equal(
            rows,
            [
                ("Novelty", 9),
                ("Methodology", 8),
                ("Clarity", 7.5),
                ("Significance", 9),
                ("Citations", 6),
            ],
        )

    def test_missing_key_renders_as_zero(self) -> None:
        rows = dict(score_rows({"novelty": 4, "clarity": 5}))

        check.equal(rows["Novelty"], 4)
        check.equal(rows["Methodology"], 0)
        check.equal(rows["Citations"], 0)


class TestAuthorLine:
    """Tests for the dashboard byline."""

    def test_joins_authors(self, review: ReviewData) -> None:
        check.equal(author_line(review.authors), "K. He, X. Zhang")

    def test_no_authors_hides_byline(self) -> None:
        check.is_none(author_line([]))
        check.is_none(author_line(["", "  "]))


class TestDecisionBadge:
    """Tests for decision badge colors."""

    def test_reject_is_red(self) -> None:
        check.is_in("red", decision_badge_classes(Decision.REJECT))

    def test_accept_is_green(self) -> None:
        check.is_in("green", decision_badge_classes("Accept"))

    def test_each_decision_has_distinct_color(self) -> None:
        classes = {decision_badge_classes(decision) for decision in Decision}

        check.equal(len(classes), len(Decision))

    def test_unknown_decision_uses_major_revision(self) -> None:
        check.equal(
            decision_badge_classes("Strong Accept"),
            decision_badge_classes(Decision.MAJOR_REVISION),
        )


class TestIsPlainEnter:
    """Tests for Enter key handling in the chat input."""

    def test_plain_enter_sends(self) -> None:
        check.is_true(is_plain_enter({"key": "Enter", "shiftKey": False}))
        check.is_true(is_plain_enter(None))

    def test_modified_enter_inserts_newline(self) -> None:
        check.is_false(is_plain_enter({"shiftKey": True}))
        check.is_false(is_plain_enter({"ctrlKey": True}))


class TestMarkdownToHtml:
    """Tests for chat message markdown rendering."""

    def test_escapes_html(self) -> None:
        check.equal(markdown_to_html("<script>"), "&lt;script&gt;")

    def test_bold_and_italic(self) -> None:
        html = markdown_to_html("**bold** and *italic*")

        check.is_in("<strong>bold</strong>", html)
        check.is_in("<em>italic</em>", html)

    def test_inline_code(self) -> None:
        check.is_in("<code", markdown_to_html("use `resnet50`"))

    def test_bullet_list(self) -> None:
        html = markdown_to_html("Results:\n- first\n- second")

        check.is_in("<ul", html)
        check.is_in("<li>first</li>", html)
        check.is_in("<li>second</li>", html)

    def test_numbered_list(self) -> None:
        html = markdown_to_html("1. setup\n2. train")

        check.is_in("<ol", html)
        check.is_in("<li>train</li>", html)

    def test_newlines_become_breaks(self) -> None:
        check.equal(markdown_to_html("a\nb"), "a<br>b")
