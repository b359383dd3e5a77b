"""
API layer package for confeti.
Exports the FastAPI app.
"""

from confeti.interfaces.api.api_app import api_app

__all__ = ["api_app"]
