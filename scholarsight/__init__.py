"""ScholarSight - AI-assisted peer review for research papers.

Combines FastAPI for HTTP endpoints, the Gemini API for review generation
and grounded chat, NiceGUI for visualization, and Pydantic for data validation.

Components:
    - api: HTTP endpoints for review uploads
    - gemini: Review request and chat session clients
    - chat: Transcript model and streaming message aggregation
    - ingest: Upload validation and base64 encoding
    - ui: Web interface for the review dashboard and chat drawer
    - models: Review schema
"""

__version__ = "0.1.0"
