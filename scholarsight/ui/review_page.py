"""NiceGUI review dashboard with a streaming paper chat."""

import logging
from functools import partial

from nicegui import events, ui

from scholarsight.chat.transcript import Message, Role
from scholarsight.gemini.chat_client import open_chat_session
from scholarsight.gemini.config import GeminiConfig, get_gemini_config
from scholarsight.ingest.document import (
    MAX_FILE_SIZE,
    DocumentValidationError,
    ingest_document,
    inspect_pdf,
)
from scholarsight.models.schemas import ReviewData
from scholarsight.session import AppView, ReviewSession
from scholarsight.ui.formatting import (
    author_line,
    decision_badge_classes,
    is_plain_enter,
    markdown_to_html,
    score_rows,
)

logger = logging.getLogger(__name__)

# Only plain Enter is forwarded; modified Enter keeps its default newline
ENTER_JS_HANDLER = """(e) => {
    if (!e.shiftKey && !e.ctrlKey && !e.altKey && !e.metaKey) {
        e.preventDefault();
        emit({shiftKey: e.shiftKey, ctrlKey: e.ctrlKey, altKey: e.altKey, metaKey: e.metaKey});
    }
}"""

CUSTOM_CSS = """
<link href="https://fonts.googleapis.com/css2?family=Inter:wght@400;500;600&family=Merriweather:wght@700&display=swap"
      rel="stylesheet">
<style>
    * { font-family: 'Inter', sans-serif; }
    .font-serif { font-family: 'Merriweather', serif; }

    body { background: #f8fafc; min-height: 100vh; }

    .card {
        background: white;
        border: 1px solid #e2e8f0;
        border-radius: 12px;
        box-shadow: 0 1px 2px rgba(0, 0, 0, 0.05);
    }

    .message-user {
        background: #4f46e5;
        color: white;
        border-radius: 18px 4px 18px 18px;
    }

    .message-model {
        background: #f1f5f9;
        color: #1e293b;
        border: 1px solid #e2e8f0;
        border-radius: 4px 18px 18px 18px;
    }

    .typing-dot {
        width: 8px; height: 8px;
        background: #4f46e5;
        border-radius: 50%;
        animation: bounce 1.4s infinite ease-in-out;
    }
    .typing-dot:nth-child(2) { animation-delay: 0.2s; }
    .typing-dot:nth-child(3) { animation-delay: 0.4s; }

    @keyframes bounce {
        0%, 60%, 100% { transform: translateY(0); }
        30% { transform: translateY(-6px); }
    }

    .score-bar { background: #4f46e5; }

    .message-model strong { font-weight: 600; }
    .message-model em { font-style: italic; }
    .message-model code { font-family: 'Menlo', 'Monaco', monospace; }
</style>
"""


def _load_config() -> GeminiConfig | None:
    try:
        return get_gemini_config()
    except ValueError as e:
        logger.warning(f"Gemini is not configured: {e}")
        return None


def render_score_chart(review: ReviewData) -> None:
    with ui.column().classes("card w-full p-6 gap-3"):
        ui.label("Scores").classes("font-semibold text-slate-700")
        for label, score in score_rows(review.scores):
            with ui.row().classes("w-full items-center gap-3 no-wrap"):
                ui.label(label).classes("w-28 text-sm text-slate-500")
                with ui.element("div").classes("flex-grow h-2 bg-slate-100 rounded-full"):
                    ui.element("div").classes("score-bar h-2 rounded-full").style(
                        f"width: {score * 10:.0f}%"
                    )
                ui.label(f"{score:g}/10").classes("w-12 text-right text-sm font-medium")


def render_point_list(title: str, items: list[str], accent: str) -> None:
    with ui.column().classes(f"card w-full p-6 gap-2 border-t-4 {accent}"):
        ui.label(title).classes("font-semibold text-slate-700")
        for item in items:
            ui.label(f"• {item}").classes("text-sm text-slate-600")


@ui.page("/")
def review_page() -> None:
    """Main page: upload, analysis progress, dashboard and chat drawer."""
    ui.add_head_html(CUSTOM_CSS)
    config = _load_config()
    page_count: int | None = None

    def on_chat_update() -> None:
        render_messages.refresh()
        chat = session.chat
        send_btn.set_enabled(chat is None or not chat.is_busy)
        messages_scroll.scroll_to(percent=1.0)

    session = ReviewSession(
        chat_opener=partial(open_chat_session, config=config),
        config=config,
        on_view_change=lambda: render_view.refresh(),
        on_chat_update=on_chat_update,
    )

    async def handle_upload(e: events.UploadEventArguments) -> None:
        nonlocal page_count
        content = await e.file.read()
        max_bytes = config.max_upload_bytes if config else MAX_FILE_SIZE
        try:
            document = ingest_document(content, e.file.content_type, e.file.name, max_bytes)
        except DocumentValidationError as err:
            upload_error.set_text(str(err))
            upload_error.set_visibility(True)
            return

        upload_error.set_visibility(False)
        info = inspect_pdf(content) if document.mime_type == "application/pdf" else None
        page_count = info.pages if info else None
        await session.analyze(document)
        render_messages.refresh()

    def reset() -> None:
        nonlocal page_count
        page_count = None
        chat_drawer.hide()
        session.reset()
        render_messages.refresh()

    def send_message() -> None:
        chat = session.chat
        if chat is None:
            return
        if chat.submit(input_field.value or "") is not None:
            input_field.value = ""

    def on_input_enter(e: events.GenericEventArguments) -> None:
        if is_plain_enter(e.args if isinstance(e.args, dict) else None):
            send_message()

    def render_message(msg: Message, typing: bool) -> None:
        is_user = msg.role is Role.USER
        align = "justify-end" if is_user else "justify-start"
        bubble = "message-user" if is_user else "message-model"

        with ui.row().classes(f"w-full {align}"):
            with ui.element("div").classes(f"max-w-[85%] px-4 py-3 {bubble}"):
                if typing:
                    with ui.row().classes("gap-1 py-1"):
                        for _ in range(3):
                            ui.element("div").classes("typing-dot")
                elif is_user:
                    ui.label(msg.text).classes("text-sm whitespace-pre-wrap")
                else:
                    ui.html(markdown_to_html(msg.text), sanitize=False).classes(
                        "text-sm leading-relaxed"
                    )

    @ui.refreshable
    def render_messages() -> None:
        chat = session.chat
        if chat is None:
            return
        messages = chat.messages
        for i, msg in enumerate(messages):
            render_message(msg, typing=chat.is_typing and i == len(messages) - 1)

    def render_upload() -> None:
        with ui.column().classes("w-full items-center p-6 gap-6"):
            ui.label("AI-Powered Peer Review Assistant").classes(
                "text-4xl font-serif font-bold text-slate-900 text-center"
            )
            ui.label(
                "Upload a research paper to receive an instant, comprehensive analysis "
                "including impact scoring, methodology critique, and clarity assessment."
            ).classes("text-lg text-slate-600 text-center max-w-2xl")
            ui.upload(
                label="Upload your Research Paper (PDF or TXT)",
                on_upload=handle_upload,
                auto_upload=True,
            ).props('accept=".pdf,.txt" flat bordered').classes("w-full max-w-xl")
            max_mb = config.max_upload_mb if config else MAX_FILE_SIZE // (1024 * 1024)
            ui.label(f"Supported formats: PDF, TXT (Max {max_mb}MB)").classes(
                "text-xs text-slate-400"
            )

    def render_analyzing() -> None:
        with ui.column().classes("w-full items-center p-12 gap-4"):
            ui.spinner(size="3em", color="indigo")
            ui.label("Reviewing Paper").classes("text-2xl font-serif font-bold text-slate-800")
            ui.label(session.loading_step).classes("text-slate-500 animate-pulse")

    def render_error() -> None:
        with ui.column().classes("w-full items-center p-12"):
            with ui.column().classes("bg-red-50 p-6 rounded-2xl border border-red-100 items-center"):
                ui.icon("warning").classes("text-5xl text-red-500")
                ui.label("Analysis Failed").classes("text-xl font-bold text-red-700")
                ui.label(session.error_message or "An unexpected error occurred.").classes(
                    "text-red-600 text-center"
                )
                ui.button("Try Again", on_click=reset).props("outline color=red")

    def render_dashboard(review: ReviewData) -> None:
        with ui.column().classes("w-full max-w-6xl mx-auto p-6 gap-6"):
            with ui.row().classes("w-full items-start justify-between"):
                with ui.column().classes("gap-1"):
                    ui.label(review.title).classes("text-2xl font-serif font-bold text-slate-900")
                    if byline := author_line(review.authors):
                        ui.label(byline).classes("text-sm text-slate-500")
                ui.label(review.decision.value).classes(
                    f"px-4 py-1 rounded-full border font-semibold "
                    f"{decision_badge_classes(review.decision)}"
                )
            with ui.row().classes("gap-2"):
                ui.button("Chat with Paper", icon="forum", on_click=chat_drawer.show).props(
                    "unelevated color=indigo"
                )
                ui.button("Review Another Paper", on_click=reset).props("outline")

            with ui.column().classes("card w-full p-6 gap-2"):
                ui.label("Summary").classes("font-semibold text-slate-700")
                ui.label(review.summary).classes("text-slate-600 leading-relaxed")

            render_score_chart(review)

            with ui.row().classes("w-full gap-6 no-wrap"):
                render_point_list("Strengths", review.strengths, "border-t-green-500")
                render_point_list("Weaknesses", review.weaknesses, "border-t-amber-500")

            with ui.column().classes("card w-full p-6 gap-2"):
                ui.label("Detailed Feedback").classes("font-semibold text-slate-700")
                ui.html(markdown_to_html(review.detailed_feedback), sanitize=False).classes(
                    "text-sm text-slate-600 leading-relaxed"
                )

    @ui.refreshable
    def render_view() -> None:
        if session.view is AppView.ANALYZING:
            render_analyzing()
        elif session.view is AppView.ERROR:
            render_error()
        elif session.view is AppView.DASHBOARD and session.review is not None:
            render_dashboard(session.review)
        else:
            render_upload()

    # === UI Layout ===
    with ui.header().classes("bg-white border-b items-center justify-between px-6 py-3"):
        ui.label("ScholarSight").classes(
            "text-xl font-serif font-bold text-slate-800 cursor-pointer"
        ).on("click", lambda: session.view is not AppView.ANALYZING and reset())
        ui.label().bind_text_from(
            session,
            "document",
            lambda doc: (
                ""
                if doc is None
                else doc.name + (f" ({page_count} pages)" if page_count else "")
            ),
        ).classes("text-sm text-slate-500 truncate max-w-[300px]")

    with ui.right_drawer(value=False).classes("bg-white p-0").props("width=450") as chat_drawer:
        with ui.column().classes("w-full h-full no-wrap gap-0"):
            with ui.row().classes("w-full items-center justify-between p-4 border-b bg-slate-50"):
                ui.label("Research Assistant").classes("font-semibold text-indigo-700")
                ui.button(icon="close", on_click=chat_drawer.hide).props("flat round dense")
            with ui.scroll_area().classes("flex-grow w-full") as messages_scroll:
                with ui.column().classes("w-full p-4 gap-4"):
                    render_messages()
            with ui.row().classes("w-full p-4 gap-2 items-end border-t bg-slate-50 no-wrap"):
                input_field = (
                    ui.textarea(placeholder="Ask about the paper...")
                    .props("autogrow outlined dense rows=1")
                    .classes("flex-grow")
                    .on("keydown.enter", on_input_enter, js_handler=ENTER_JS_HANDLER)
                )
                send_btn = ui.button(icon="send", on_click=send_message).props(
                    "unelevated color=indigo"
                )

    with ui.column().classes("w-full"):
        render_view()
        upload_error = ui.label().classes(
            "mx-auto p-4 bg-red-50 border border-red-200 rounded-lg text-red-700 text-sm"
        )
        upload_error.set_visibility(False)
