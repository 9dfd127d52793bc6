"""
FastAPI dependencies.

Shared service instances live on app.state; create_app() puts them there.
"""
from fastapi import Request

from bias_scorecard import BiasScorecardStore
from event_sentiment import EventSentimentAnalyzer


def get_store(request: Request) -> BiasScorecardStore:
    return request.app.state.store


def get_analyzer(request: Request) -> EventSentimentAnalyzer:
    return request.app.state.analyzer
