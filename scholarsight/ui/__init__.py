"""NiceGUI interface - thin visualization layer for reviews and chat.

Responsibilities:
    - Paper upload with inline validation errors
    - Analysis progress and full-screen error views
    - Review dashboard with decision badge and score chart
    - Chat drawer re-rendered on every streamed fragment

Contains minimal business logic. Delegates state to ReviewSession and the
chat aggregator. Remains a pure presentation layer.
"""
