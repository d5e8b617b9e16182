"""
Page Backend package.

An in-memory page store served over REST and GraphQL. The FastAPI app
instance is exposed here for convenience imports (src.api.app).
"""

from .main import app, create_app  # noqa: F401
