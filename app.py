"""
App assembly entry point.

Re-exports the FastAPI `app` from `eventdesk.api.main` so `uvicorn app:app`
works from the repository root.
"""

from eventdesk.api.main import app  # noqa: F401
