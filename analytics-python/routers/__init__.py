"""
API Routers Package
"""

from .recommendations import router as recommendations_router
from .analytics import router as analytics_router

__all__ = ['recommendations_router', 'analytics_router']
