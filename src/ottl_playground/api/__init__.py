"""
HTTP surface for the playground.

Usage::

    from ottl_playground.api import create_app
    app = create_app()  # ready for uvicorn
"""

from ottl_playground.api.app import create_app

__all__ = ["create_app"]
