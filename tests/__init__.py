"""Test package for ScholarSight.

Unit tests cover isolated logic. Integration tests cover HTTP workflows.

Structure:
    - unit/: Individual function and class tests
    - integration/: API tests through the ASGI app

Model calls are replaced with in-process fakes except in tests marked as
requiring an API key. Uses pytest with pytest-check for soft assertions.
"""
