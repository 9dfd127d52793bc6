"""
Dashboard API Routers.
"""
from . import health, scorecard, sentiment, stream

__all__ = ["health", "scorecard", "sentiment", "stream"]
