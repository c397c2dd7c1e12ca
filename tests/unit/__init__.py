"""Unit tests for individual components in isolation.

Coverage:
    - chat/: Transcript invariants and streaming aggregation
    - gemini/: Configuration, review parsing, client request building
    - ingest/: Upload validation and encoding
    - ui/: Pure formatting helpers
    - session: View state machine

Uses fakes and mocks for the Gemini SDK. Leverages pytest-check for
multiple assertions per test.
"""
