"""
API route modules.
"""

from routes.pricing import router as pricing_router

__all__ = [
    "pricing_router",
]
