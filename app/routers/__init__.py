"""
API Routers
Separate router modules for each domain.
"""

from app.routers import sid

__all__ = ["sid"]
