"""FastAPI application exposing catalog search over HTTP."""

import math
import uuid
from contextlib import asynccontextmanager
from datetime import UTC, datetime

from fastapi import FastAPI, HTTPException, Query, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pydantic import ValidationError

from catalog_search.clients.catalog_client import CatalogClient
from catalog_search.config import get_settings
from catalog_search.errors import CatalogUnavailableError
from catalog_search.logging_config import clear_request_id, get_logger, set_request_id, setup_logging
from catalog_search.models.api import (
    AutocompleteResponse,
    CatalogStatus,
    HighlightResponse,
    SearchResponse,
)
from catalog_search.models.error import ErrorResponse
from catalog_search.models.item import ItemType
from catalog_search.models.search import SearchFilters
from catalog_search.retrieval.engine import SearchEngine
from catalog_search.retrieval.highlight import highlight
from catalog_search.storage.catalog_cache import CatalogCache

setup_logging()
logger = get_logger(__name__)

settings = get_settings()

# Global service instances
catalog_client: CatalogClient | None = None
catalog_cache: CatalogCache | None = None
search_engine: SearchEngine | None = None


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Manage application lifespan - startup and shutdown."""
    global catalog_client, catalog_cache, search_engine

    logger.info("Starting Catalog Search...")
    logger.info(
        f"Configuration: catalog={settings.catalog_api_url}, "
        f"ttl={settings.catalog_ttl_seconds}s, min_score={settings.min_score}"
    )

    catalog_client = CatalogClient(
        base_url=settings.catalog_api_url,
        timeout=settings.catalog_timeout,
        fetch_limit=settings.catalog_fetch_limit,
    )
    catalog_cache = CatalogCache(fetch=catalog_client, ttl_seconds=settings.catalog_ttl_seconds)
    search_engine = SearchEngine(settings.search_config())

    logger.info("Catalog Search started successfully")

    yield

    logger.info("Shutting down Catalog Search...")
    if catalog_client:
        await catalog_client.close()
    logger.info("Catalog Search shut down successfully")


app = FastAPI(
    title=settings.api_title,
    version=settings.api_version,
    description="Fuzzy search, autocomplete and highlighting over the storefront catalog",
    lifespan=lifespan,
    docs_url="/docs",
    redoc_url="/redoc",
    openapi_url="/openapi.json",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["GET", "POST"],
    allow_headers=["*"],
)


def _error_response(request: Request, status_code: int, error: str, detail: str) -> JSONResponse:
    request_id = getattr(request.state, "request_id", None)
    return JSONResponse(
        status_code=status_code,
        content=ErrorResponse(
            error=error,
            detail=detail,
            timestamp=datetime.now(UTC),
            request_id=request_id,
        ).model_dump(mode="json"),
    )


@app.middleware("http")
async def request_middleware(request: Request, call_next):
    """Add request ID tracking and error handling."""
    request_id = str(uuid.uuid4())
    request.state.request_id = request_id
    set_request_id(request_id)

    try:
        logger.info(f"Request started: {request.method} {request.url.path}")
        response = await call_next(request)
        logger.info(
            f"Request completed: {request.method} {request.url.path} - Status: {response.status_code}"
        )
        return response
    except Exception as e:
        logger.error(
            f"Unhandled exception: {str(e)}",
            exc_info=True,
            extra={"path": request.url.path},
        )
        return _error_response(
            request, status.HTTP_500_INTERNAL_SERVER_ERROR, "Internal Server Error", str(e)
        )
    finally:
        clear_request_id()


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """Handle request validation errors."""
    errors = []
    for error in exc.errors():
        field = " -> ".join(str(loc) for loc in error["loc"])
        errors.append(f"{field}: {error['msg']}")
    detail = "; ".join(errors)

    logger.warning(f"Validation error: {detail}", extra={"path": request.url.path})

    return _error_response(
        request, status.HTTP_422_UNPROCESSABLE_ENTITY, "Validation Error", detail
    )


@app.exception_handler(CatalogUnavailableError)
async def catalog_unavailable_handler(request: Request, exc: CatalogUnavailableError):
    """Catalog never loaded: search is temporarily unavailable."""
    logger.error(f"Catalog unavailable: {exc}")
    return _error_response(
        request, status.HTTP_503_SERVICE_UNAVAILABLE, "Catalog Unavailable", str(exc)
    )


def _require_services() -> tuple[CatalogCache, SearchEngine]:
    if catalog_cache is None or search_engine is None:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Search service not initialized",
        )
    return catalog_cache, search_engine


def _catalog_status(cache: CatalogCache) -> CatalogStatus:
    snapshot = cache.snapshot
    age = cache.age
    return CatalogStatus(
        loaded=snapshot is not None,
        item_count=len(snapshot) if snapshot is not None else 0,
        age_seconds=max(0.0, age) if age is not None else None,
        stale=cache.is_stale,
        last_error=str(cache.last_error) if cache.last_error else None,
    )


# API Endpoints


@app.get("/health")
async def health_check():
    """Health check endpoint with catalog cache state."""
    catalog = _catalog_status(catalog_cache) if catalog_cache is not None else None
    return {
        "status": "healthy",
        "service": settings.api_title,
        "version": settings.api_version,
        "catalog": catalog.model_dump() if catalog else None,
    }


@app.get(
    "/api/v1/search",
    response_model=SearchResponse,
    summary="Search the catalog",
    description="Fuzzy, typo-tolerant search over products and bundlings with facet filters.",
)
async def search_catalog(
    request: Request,
    q: str = Query(default="", max_length=200, description="Search query"),
    category: list[str] = Query(default=[], description="Category slugs (any of)"),
    brand: list[str] = Query(default=[], description="Brand slugs (any of)"),
    item_type: list[ItemType] = Query(default=[], alias="type", description="Item types (any of)"),
    min_price: float | None = Query(default=None, ge=0.0),
    max_price: float | None = Query(default=None, ge=0.0),
    limit: int | None = Query(default=None, ge=1, le=200),
) -> SearchResponse:
    """Search endpoint backing the search results page."""
    cache, engine = _require_services()

    price_range = None
    if min_price is not None or max_price is not None:
        price_range = (
            min_price if min_price is not None else 0.0,
            max_price if max_price is not None else math.inf,
        )

    try:
        filters = SearchFilters(
            category=category, brand=brand, type=item_type, price_range=price_range
        )
    except ValidationError as e:
        detail = "; ".join(error["msg"] for error in e.errors())
        logger.warning(f"Invalid search filters: {detail}", extra={"path": request.url.path})
        return _error_response(
            request, status.HTTP_422_UNPROCESSABLE_ENTITY, "Validation Error", detail
        )

    effective_limit = min(limit or settings.default_limit, settings.max_results)

    if not q.strip():
        return SearchResponse(query=q, results=[], total=0)

    items = await cache.get()
    results = engine.search(items, q, filters, effective_limit)

    logger.info(f"Search '{q}' returned {len(results)} results")
    return SearchResponse(query=q, results=results, total=len(results))


@app.get(
    "/api/v1/autocomplete",
    response_model=AutocompleteResponse,
    summary="Autocomplete suggestions",
    description="Type-balanced suggestions for the navbar search box.",
)
async def autocomplete_catalog(
    q: str = Query(default="", max_length=200, description="Partial query"),
    limit: int | None = Query(default=None, ge=1, le=50),
) -> AutocompleteResponse:
    """Autocomplete endpoint backing the navbar."""
    cache, engine = _require_services()

    if len(q.strip()) < 2:
        return AutocompleteResponse(query=q, suggestions=[])

    items = await cache.get()
    groups = engine.group_suggestions(items, q, limit or settings.max_suggestions)

    return AutocompleteResponse(
        query=q,
        suggestions=groups.suggestions,
        products=groups.products,
        bundlings=groups.bundlings,
    )


@app.get(
    "/api/v1/highlight",
    response_model=HighlightResponse,
    summary="Highlight matches",
    description="Split a display string into matched and plain segments.",
)
async def highlight_text(
    text: str = Query(..., max_length=1000),
    q: str = Query(default="", max_length=200),
) -> HighlightResponse:
    return HighlightResponse(text=text, query=q, segments=highlight(text, q))


@app.post(
    "/api/v1/catalog/refresh",
    response_model=CatalogStatus,
    summary="Refresh the catalog snapshot",
    description="Force a catalog refresh; a failed refresh keeps the previous snapshot.",
)
async def refresh_catalog() -> CatalogStatus:
    cache, _ = _require_services()
    await cache.force_refresh()
    return _catalog_status(cache)


def run() -> None:
    """Run the API with uvicorn."""
    import uvicorn

    uvicorn.run("catalog_search.main:app", host="0.0.0.0", port=8080, log_config=None)


if __name__ == "__main__":
    run()
