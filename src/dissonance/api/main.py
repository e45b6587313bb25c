"""FastAPI backend for web dashboard."""

from __future__ import annotations

import asyncio
import time
from contextlib import asynccontextmanager
from pathlib import Path

import httpx
import structlog
from fastapi import FastAPI, Query, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from dissonance.api.schemas import (
    ArbitrageItem,
    ArbitrageListResponse,
    ErrorResponse,
    HealthResponse,
    MarketsListResponse,
    StatsResponse,
)
from dissonance.config import get_settings
from dissonance.config.settings import Settings
from dissonance.models import CycleResult
from dissonance.pipeline import refresh
from dissonance.views import CATEGORY_FILTERS, describe_opportunity, filter_questions

log = structlog.get_logger(__name__)

# Set by run_api() so the module-level app loads the right profile.
_config_profile: str | None = None
_config_dir: Path | None = None


def create_app(
    settings: Settings | None = None,
    transport: httpx.AsyncBaseTransport | None = None,
) -> FastAPI:
    """Build the app. The latest CycleResult lives in app.state and is replaced per refresh."""

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        if app.state.settings is None:
            app.state.settings = get_settings(_config_profile, _config_dir)
        yield

    app = FastAPI(title="dissonance API", version="0.1.0", lifespan=lifespan)
    app.add_middleware(CORSMiddleware, allow_origins=["*"], allow_methods=["*"], allow_headers=["*"])
    app.state.settings = settings
    app.state.transport = transport
    app.state.result = None
    app.state.refreshed_at = None
    app.state.refresh_lock = asyncio.Lock()

    async def _run_cycle(app: FastAPI) -> CycleResult:
        result = await refresh(app.state.settings, transport=app.state.transport)
        app.state.result = result
        app.state.refreshed_at = time.time()
        return result

    async def _refresh(app: FastAPI) -> CycleResult:
        # Cycles are serialized; concurrent refresh requests run one after another.
        async with app.state.refresh_lock:
            return await _run_cycle(app)

    async def _current(app: FastAPI) -> CycleResult:
        if app.state.result is not None:
            return app.state.result
        async with app.state.refresh_lock:
            # another request may have finished the first cycle while we waited
            if app.state.result is None:
                await _run_cycle(app)
            return app.state.result

    def _error_json(code: str, message: str, status_code: int = 404) -> JSONResponse:
        """Return consistent error JSON: { detail, code }."""
        return JSONResponse(
            status_code=status_code,
            content=ErrorResponse(detail=message, code=code).model_dump(),
        )

    @app.get("/health", response_model=HealthResponse)
    def health() -> HealthResponse:
        return HealthResponse(status="ok")

    @app.get(
        "/markets",
        response_model=MarketsListResponse,
        responses={400: {"description": "Unknown category", "model": ErrorResponse}},
    )
    async def markets_list(
        request: Request,
        search: str | None = Query(None, description="Case-insensitive text filter"),
        category: str | None = Query(None, description="politics, crypto, sports, tech, other or all"),
        limit: int = Query(100, ge=1, le=500),
        offset: int = Query(0, ge=0),
    ):
        """Aggregated questions with every provider's prices. 400 on an unknown category."""
        if category is not None and category not in CATEGORY_FILTERS:
            return _error_json(
                "bad_category",
                f"Unknown category: {category}. Choose from: {list(CATEGORY_FILTERS)}",
                status_code=400,
            )
        result = await _current(request.app)
        questions = filter_questions(result.questions, search=search, category=category)
        return MarketsListResponse(
            markets=questions[offset : offset + limit],
            total=len(questions),
            state=result.state,
        )

    @app.get("/arbitrage", response_model=ArbitrageListResponse)
    async def arbitrage_list(
        request: Request,
        limit: int = Query(10, ge=1, le=500),
    ) -> ArbitrageListResponse:
        """Opportunities sorted by edge, best first."""
        result = await _current(request.app)
        items = [
            ArbitrageItem(
                **opp.model_dump(),
                cross_provider=not opp.same_source,
                explanation=describe_opportunity(opp),
            )
            for opp in result.top_opportunities(limit)
        ]
        return ArbitrageListResponse(
            opportunities=items,
            total=len(result.opportunities),
            state=result.state,
        )

    @app.get("/stats", response_model=StatsResponse)
    async def stats(request: Request) -> StatsResponse:
        result = await _current(request.app)
        return StatsResponse(
            **result.summary.model_dump(),
            raw_market_count=result.raw_market_count,
            state=result.state,
            refreshed_at=request.app.state.refreshed_at,
        )

    @app.post("/refresh", response_model=StatsResponse)
    async def refresh_now(request: Request) -> StatsResponse:
        """Run a new cycle now and return its summary."""
        result = await _refresh(request.app)
        log.info("api_refresh", state=result.state)
        return StatsResponse(
            **result.summary.model_dump(),
            raw_market_count=result.raw_market_count,
            state=result.state,
            refreshed_at=request.app.state.refreshed_at,
        )

    return app


app = create_app()


def run_api(
    host: str = "127.0.0.1",
    port: int = 8000,
    profile: str | None = None,
    config_dir: Path | None = None,
) -> None:
    global _config_profile, _config_dir
    _config_profile = profile
    _config_dir = config_dir
    import uvicorn
    uvicorn.run("dissonance.api.main:app", host=host, port=port, reload=False)
