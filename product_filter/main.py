"""FastAPI application wiring the product filter service."""
from __future__ import annotations

import logging
from decimal import Decimal

from fastapi import Depends, FastAPI, HTTPException, Query, Request, status
from fastapi.responses import JSONResponse

from .auth import AuthenticationError, TokenStore, require_token
from .config import Settings, settings
from .models import FilterCriteria, LoginRequest, LoginResponse, ProblemDetails, QueryResult
from .service import ProductFilterService

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
LOG_LEVEL = logging.getLevelName(settings.log_level.upper())

logging.basicConfig(level=LOG_LEVEL, format=LOG_FORMAT, force=True)
for name in ("uvicorn", "uvicorn.error", "uvicorn.access", "httpx"):
    logging.getLogger(name).setLevel(LOG_LEVEL)

logger = logging.getLogger(__name__)

ERROR_TITLE = "An error occurred while processing your request"


def create_app(config: Settings | None = None, service: ProductFilterService | None = None) -> FastAPI:
    config = config or settings
    app = FastAPI(title="Product Filter Service")
    app.state.settings = config
    app.state.service = service or ProductFilterService.from_settings(config)
    app.state.tokens = TokenStore(config)

    @app.on_event("shutdown")
    async def shutdown_event() -> None:
        await app.state.service.close()

    @app.get("/health")
    async def health(request: Request) -> dict:
        cache = request.app.state.service.cache
        entries = len(cache) if hasattr(cache, "__len__") else None
        return {
            "status": "ok",
            "cache": cache.name,
            "entries": entries,
            "catalog": config.catalog_url,
        }

    @app.post("/auth/login", response_model=LoginResponse)
    async def login(payload: LoginRequest, request: Request) -> LoginResponse:
        try:
            token = request.app.state.tokens.login(payload.username, payload.password)
        except AuthenticationError as exc:
            raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail=str(exc)) from exc
        return LoginResponse(token=token, expiresIn=config.token_ttl_seconds)

    @app.get(
        "/products/filter",
        response_model=QueryResult,
        responses={500: {"model": ProblemDetails}},
        dependencies=[Depends(require_token)],
    )
    async def filter_products(
        request: Request,
        min_price: Decimal | None = Query(None, alias="minPrice", description="Inclusive lower price bound"),
        max_price: Decimal | None = Query(None, alias="maxPrice", description="Inclusive upper price bound"),
        size: str | None = Query(None, description="Size to match, case-insensitive"),
        highlight: str | None = Query(None, description="Comma separated words to highlight"),
    ):
        criteria = FilterCriteria.from_query(min_price, max_price, size, highlight)
        try:
            return await request.app.state.service.get_filtered_products(criteria)
        except Exception as exc:
            logger.exception(
                "Failed to filter products minPrice=%s maxPrice=%s size=%r highlight=%r",
                min_price,
                max_price,
                size,
                highlight,
            )
            problem = ProblemDetails(
                status=status.HTTP_500_INTERNAL_SERVER_ERROR,
                title=ERROR_TITLE,
                detail=str(exc),
            )
            return JSONResponse(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                content=problem.model_dump(),
                media_type="application/problem+json",
            )

    return app


app = create_app()
