import time
from dataclasses import dataclass
from typing import Callable, Optional, Tuple

from fastapi import FastAPI, Request
from fastapi.exception_handlers import http_exception_handler
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, PlainTextResponse, Response
from starlette.exceptions import HTTPException as StarletteHTTPException

from .aggregator import LanguageSource, get_language_chart_data
from .cache import InMemoryResponseCache, ResponseCache
from .config import Settings, get_settings
from .github_client import GitHubLanguageSource
from .logging import configure_logging, get_logger, log_request
from .renderer import render_chart

logger = get_logger()

SourceFactory = Callable[[Settings], LanguageSource]


def github_source(settings: Settings) -> LanguageSource:
    return GitHubLanguageSource(settings.github_token, timeout=settings.github_timeout)


def _settings(request: Request) -> Settings:
    # A fixed Settings object wins; otherwise the environment is read per request.
    return request.app.state.settings or get_settings()


# ----------------------------
# Handlers
# ----------------------------

def root():
    return PlainTextResponse("GitHub Language Chart API")


def health():
    return {"status": "ok"}


async def echo(request: Request):
    body = await request.body()
    return PlainTextResponse(f"Echo: {body.decode('utf-8', errors='replace')}")


def build_language_chart(request: Request) -> Response:
    """Run fetch -> aggregate -> render and wrap the outcome in a response.

    Every failure along the way becomes a generic 500; the detail only goes to
    the log.
    """
    try:
        settings = _settings(request)
        source = request.app.state.source_factory(settings)
        chart_data = get_language_chart_data(source)
        if not chart_data:
            return JSONResponse({"error": "No language data available"}, status_code=404)
        svg = render_chart(chart_data, credit=settings.chart_credit)
        return Response(
            content=svg,
            media_type="image/svg+xml",
            headers={"Cache-Control": f"public, max-age={settings.cache_max_age}"},
        )
    except Exception:
        logger.exception("Error generating language chart")
        return JSONResponse({"error": "Failed to generate chart"}, status_code=500)


def language_chart(request: Request):
    cache: ResponseCache = request.app.state.response_cache
    cache_key = str(request.url)
    cached = cache.get(cache_key)
    if cached is not None:
        logger.debug("Serving cached chart for %s", cache_key)
        return cached
    response = build_language_chart(request)
    if response.status_code == 200:
        cache.put(cache_key, response)
    return response


@dataclass(frozen=True)
class Route:
    path: str
    endpoint: Callable
    methods: Tuple[str, ...]


ROUTES = (
    Route("/", root, ("GET",)),
    Route("/api/health", health, ("GET",)),
    Route("/api/echo", echo, ("POST",)),
    Route("/api/language-chart", language_chart, ("GET", "HEAD")),
)


async def not_found(request: Request, exc: StarletteHTTPException):
    # Unknown paths and known paths hit with another method look the same.
    if exc.status_code in (404, 405):
        return PlainTextResponse("Not Found", status_code=404)
    return await http_exception_handler(request, exc)


def create_app(
    settings: Optional[Settings] = None,
    cache: Optional[ResponseCache] = None,
    source_factory: Optional[SourceFactory] = None,
) -> FastAPI:
    startup_settings = settings or get_settings()
    configure_logging(level=startup_settings.log_level)

    app = FastAPI(
        title="GitHub Language Chart API",
        version="0.1.0",
        docs_url=None,
        redoc_url=None,
        openapi_url=None,
    )
    app.state.settings = settings
    app.state.response_cache = cache if cache is not None else InMemoryResponseCache(max_age=startup_settings.cache_max_age)
    app.state.source_factory = source_factory or github_source

    app.add_middleware(
        CORSMiddleware,
        allow_origins=startup_settings.allow_origins,
        allow_credentials=False,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        start = time.perf_counter()
        response = await call_next(request)
        log_request(request.method, request.url.path, response.status_code, (time.perf_counter() - start) * 1000)
        return response

    app.add_exception_handler(StarletteHTTPException, not_found)

    for route in ROUTES:
        app.add_api_route(route.path, route.endpoint, methods=list(route.methods))

    return app


app = create_app()
