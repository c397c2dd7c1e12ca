"""FastAPI endpoints for ScholarSight.

HTTP routes with async request handling.

Endpoints:
    - GET /health: Service health status
    - POST /review/upload: Upload a paper and receive its structured review
"""

from scholarsight.api.app import app, create_app

__all__ = ["app", "create_app"]
