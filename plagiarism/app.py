"""
Plagiarism check gateway - HTTP surface
Rate limits callers, validates and classifies input, answers from the cache
when possible and otherwise forwards to GoWinston
"""

from contextlib import asynccontextmanager
from typing import Any, Dict, Optional

from fastapi import APIRouter, FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, PlainTextResponse
from loguru import logger

from .cache import CacheStore
from .client import PlagiarismClient, truncate, utc_timestamp
from .errors import (
    PROCESSING_FAILED,
    InvalidInput,
    InvalidUrl,
    PlagiarismCheckError,
    RateLimitExceeded,
)
from .models import CheckResponse, ErrorResponse, HealthResponse, StatsResponse
from .rate_limit import RateLimiter
from .scheduler import CacheSweeper
from .settings import Settings
from .validators import is_valid_url, url_hostname, validate_check_input

router = APIRouter()


def client_identity(request: Request, trust_proxy: bool = False) -> str:
    """Caller identity for rate limiting: the client IP address"""
    if trust_proxy:
        forwarded = request.headers.get("x-forwarded-for", "")
        first_hop = forwarded.split(",")[0].strip()
        if first_hop:
            return first_hop
    return request.client.host if request.client else "unknown"


async def _read_body(request: Request) -> Dict[str, Any]:
    try:
        body = await request.json()
    except ValueError:
        raise InvalidInput("Request body must be valid JSON")
    if not isinstance(body, dict):
        raise InvalidInput("Request body must be a JSON object")
    return body


def _error_response(exc: PlagiarismCheckError) -> JSONResponse:
    envelope = ErrorResponse(error=exc.error, message=exc.message, timestamp=utc_timestamp())
    return JSONResponse(status_code=exc.status_code, content=envelope.model_dump())


@router.post("/check")
async def check(request: Request):
    """Check text or a URL for plagiarism"""
    state = request.app.state

    state.limiter.hit(client_identity(request, state.settings.trust_proxy))

    body = await _read_body(request)
    check_input = validate_check_input(
        body.get("input"), body.get("type"), state.settings.max_input_chars
    )
    text, check_type = check_input.text, check_input.check_type

    cache_key = CacheStore.make_key(check_type, text)
    cached = state.cache.get(cache_key)
    if cached is not None:
        logger.info(f"plagiarism_check type={check_type} cache=HIT key={cache_key}")
        cached["cached"] = True
        cached["message"] = f"{cached['message']} (cached result)"
        return cached

    logger.info(f"plagiarism_check type={check_type} cache=MISS chars={len(text)}")

    client: PlagiarismClient = state.client
    if check_type == "url":
        if not is_valid_url(text):
            raise InvalidUrl()
        data = await client.check_url(text)
        message = f"Successfully processed URL for plagiarism check: {url_hostname(text)}"
    else:
        data = await client.check_text(text)
        message = (
            "Successfully processed text for plagiarism check "
            f"({data['textStats']['length']} characters)"
        )

    response = CheckResponse(
        type=check_type,
        message=message,
        timestamp=utc_timestamp(),
        input=truncate(text),
        data=data,
        cached=False,
    ).model_dump()

    state.cache.put(cache_key, response)
    return response


@router.get("/health")
async def health(request: Request):
    """Health check endpoint"""
    state = request.app.state
    return HealthResponse(
        timestamp=utc_timestamp(),
        cache_size=state.cache.size,
        api_configured=state.client.configured,
    ).model_dump()


@router.get("/stats")
async def stats(request: Request):
    """Cache statistics"""
    state = request.app.state
    cache_stats = state.cache.get_stats()
    return StatsResponse(
        cache_size=cache_stats["size"],
        cache_duration_minutes=cache_stats["ttl_seconds"] / 60,
        rate_limit=state.limiter.describe(),
        timestamp=utc_timestamp(),
        cache_hits=cache_stats["hits"],
        cache_misses=cache_stats["misses"],
    ).model_dump()


async def handle_check_error(request: Request, exc: PlagiarismCheckError) -> JSONResponse:
    if isinstance(exc, RateLimitExceeded):
        response = _error_response(exc)
        response.headers["Retry-After"] = str(exc.retry_after)
        return response

    if exc.error == PROCESSING_FAILED:
        logger.error(f"Plagiarism check error: {type(exc).__name__}: {exc.message}")
    return _error_response(exc)


async def catch_unexpected_errors(request: Request, call_next):
    """Turn anything the domain handlers did not catch into the generic 500 envelope"""
    try:
        return await call_next(request)
    except Exception:
        logger.exception(f"Unhandled error on {request.method} {request.url.path}")
        return _internal_error_response()


def _internal_error_response() -> JSONResponse:
    envelope = ErrorResponse(
        error="Internal server error",
        message="An unexpected error occurred",
        timestamp=utc_timestamp(),
    )
    return JSONResponse(status_code=500, content=envelope.model_dump())


def create_app(
    settings: Optional[Settings] = None,
    cache: Optional[CacheStore] = None,
    limiter: Optional[RateLimiter] = None,
    client: Optional[PlagiarismClient] = None,
) -> FastAPI:
    """
    Build the gateway application

    One cache, limiter and upstream client per application; pass fresh
    instances to isolate tests.
    """
    if settings is None:
        settings = Settings.from_env()
    if cache is None:
        cache = CacheStore(ttl_seconds=settings.cache_ttl_seconds)
    if limiter is None:
        limiter = RateLimiter(
            max_requests=settings.rate_limit_max,
            window_seconds=settings.rate_limit_window_seconds,
        )
    if client is None:
        client = PlagiarismClient(
            api_url=settings.api_url,
            api_token=settings.api_token,
            language=settings.language,
            country=settings.country,
            text_timeout=settings.text_timeout,
            url_timeout=settings.url_timeout,
        )
    sweeper = CacheSweeper(cache, limiter, interval_seconds=settings.sweep_interval_seconds)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        sweeper.start()
        try:
            yield
        finally:
            await sweeper.stop()
            await client.aclose()

    app = FastAPI(title="Plagiarism Check Gateway", lifespan=lifespan)
    app.state.settings = settings
    app.state.cache = cache
    app.state.limiter = limiter
    app.state.client = client
    app.state.sweeper = sweeper

    # Registered first so CORS wraps it and 500s carry CORS headers too
    app.middleware("http")(catch_unexpected_errors)
    app.add_middleware(CORSMiddleware, allow_origins=["*"], allow_methods=["*"], allow_headers=["*"])
    app.add_exception_handler(PlagiarismCheckError, handle_check_error)

    @app.get("/", response_class=PlainTextResponse)
    async def root():
        return "API is running..."

    app.include_router(router, prefix=settings.route_prefix)
    return app
