"""Integration tests for components working together as a system.

Coverage:
    - API endpoints with real HTTP requests through ASGITransport
    - Upload validation, encoding and review serialization end to end
    - Live Gemini reviews (when GEMINI_API_KEY is configured)

The review client is overridden with a fake unless a live test opts in.
"""
