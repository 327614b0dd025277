"""
Name: ASGI Entrypoint (noteboard.main)

Responsibilities:
  - Re-export the FastAPI app for ASGI servers and tooling
  - Keep the import path stable for uvicorn (noteboard.main:app)

Notes/Constraints:
  - No configuration or IO should live here
"""

from noteboard.api.main import app

__all__ = ["app"]
