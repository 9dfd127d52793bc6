import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from bias_scorecard import BiasScorecardConfig, BiasScorecardStore, RecomputeScheduler, get_config
from core.clock import ClockProtocol
from dashboard.broadcast import ScorecardBroadcaster
from dashboard.routers import health, scorecard, sentiment, stream
from event_sentiment import EventSentimentAnalyzer

logger = logging.getLogger(__name__)


def create_app(
    config: Optional[BiasScorecardConfig] = None,
    store: Optional[BiasScorecardStore] = None,
    analyzer: Optional[EventSentimentAnalyzer] = None,
    clock: Optional[ClockProtocol] = None,
) -> FastAPI:
    """
    Build the API application.

    Args:
        config: Scorecard config. Uses get_config() (environment) if not provided.
        store: Scorecard store. Created from config and clock if not provided.
        analyzer: Event sentiment analyzer. Defaults to standard scoring.
        clock: Clock for scorecard timestamps and the scheduler.
    """
    store = store or BiasScorecardStore(config=config or get_config(), clock=clock)
    analyzer = analyzer or EventSentimentAnalyzer()
    broadcaster = ScorecardBroadcaster()
    scheduler = RecomputeScheduler(store, clock=clock)

    store.subscribe(broadcaster.publish)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        logger.info("FX sentiment engine API starting up")
        await scheduler.start()
        try:
            yield
        finally:
            await scheduler.stop()
            logger.info("FX sentiment engine API shut down")

    app = FastAPI(
        title="FX Sentiment Engine API",
        description="Currency bias scorecards and economic event sentiment.",
        version="1.0.0",
        lifespan=lifespan,
    )

    # CORS (Allow local frontend development)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],  # Restrict in production
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.state.store = store
    app.state.analyzer = analyzer
    app.state.broadcaster = broadcaster
    app.state.scheduler = scheduler

    # Include Routers
    app.include_router(health.router)
    app.include_router(scorecard.router)
    app.include_router(sentiment.router)
    app.include_router(stream.router)

    @app.get("/")
    def root():
        return {"status": "ok", "message": "FX Sentiment Engine API is running"}

    return app


app = create_app()

if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000)
