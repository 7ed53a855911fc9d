"""
Response Cache Middleware
=========================

Serves repeated GET requests from the CacheManager without running the
aggregation pipeline again.

REQUEST FLOW:
-------------
    key = derive_key(path, query params)     # volatile params dropped,
                                             # repeated params kept in order
    cache.get(key)
      HIT  → cached JSON payload, X-Cache: HIT, downstream never runs
      MISS → X-Cache: MISS, call_next(request), then store the JSON body
             the downstream handler emitted

The middleware stores whatever the installed downstream chain emits, so it
composes with other response-transforming middleware (for example the
performance monitor) registered on either side of it.

Only ``200`` responses with a JSON content type are stored. Bodies that do
not decode as JSON are passed through untouched.
"""

from collections.abc import Callable, Iterable

import orjson
from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware

from src.core.config.constants import HEADER_CACHE_STATUS, CacheStatus, Stage
from src.core.exceptions import CacheError
from src.core.logging.logger import get_logger, log_stage
from src.infrastructure.cache.cache_manager import CacheManager
from src.infrastructure.cache.keys import derive_key

logger = get_logger(__name__)

TagResolver = Callable[[Request], Iterable[str]]


class ResponseCacheMiddleware(BaseHTTPMiddleware):
    """
    HTTP boundary of the response cache.

    The cache is taken from the constructor or, when omitted, from
    ``request.app.state.cache`` at request time, so the middleware can be
    registered before the application lifespan creates the cache.
    """

    def __init__(
        self,
        app,
        cache: CacheManager | None = None,
        ttl: float | None = None,
        excluded_paths: Iterable[str] = (),
        tag_resolver: TagResolver | None = None,
    ):
        """
        Args:
            app: The ASGI application
            cache: Cache to use (default: request.app.state.cache)
            ttl: TTL for stored responses (default: the cache's default TTL)
            excluded_paths: Path prefixes (whole segments) never served from
                or stored in cache
            tag_resolver: Returns invalidation tags for a request's entry
        """
        super().__init__(app)
        self._cache = cache
        self._ttl = ttl
        self._excluded_paths = tuple(excluded_paths)
        self._tag_resolver = tag_resolver

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        cache = self._resolve_cache(request)
        if cache is None or request.method != "GET" or self._is_excluded(request.url.path):
            return await call_next(request)

        key = derive_key(request.url.path, self._query_params(request))
        try:
            cached = cache.get(key)
        except CacheError as e:
            logger.warning("Cache lookup failed, serving uncached", path=request.url.path, error=e.message)
            return await call_next(request)

        if cached is not None:
            return Response(
                content=orjson.dumps(cached),
                media_type="application/json",
                headers={HEADER_CACHE_STATUS: CacheStatus.HIT.value},
            )

        response = await call_next(request)
        response.headers[HEADER_CACHE_STATUS] = CacheStatus.MISS.value

        if not self._is_cacheable(response):
            return response

        body = b""
        async for chunk in response.body_iterator:
            body += chunk if isinstance(chunk, bytes) else chunk.encode("utf-8")

        try:
            payload = orjson.loads(body)
        except orjson.JSONDecodeError:
            log_stage(logger, Stage.CACHE_POPULATION, "Response body is not JSON, not caching",
                      level="debug", path=request.url.path)
            payload = None

        if payload is not None:
            tags = self._tag_resolver(request) if self._tag_resolver else None
            try:
                cache.set(key, payload, self._ttl, tags=tags)
            except CacheError as e:
                logger.warning("Cache store failed", path=request.url.path, error=e.message)

        return Response(
            content=body,
            status_code=response.status_code,
            headers=response.headers,
            background=response.background,
        )

    def _resolve_cache(self, request: Request) -> CacheManager | None:
        if self._cache is not None:
            return self._cache
        return getattr(request.app.state, "cache", None)

    def _is_excluded(self, path: str) -> bool:
        # Whole path segments only: /health excludes /health/x, not /healthy
        return any(
            path == prefix or path.startswith(prefix.rstrip("/") + "/")
            for prefix in self._excluded_paths
        )

    @staticmethod
    def _query_params(request: Request) -> dict[str, str | list[str]]:
        grouped: dict[str, list[str]] = {}
        for name, value in request.query_params.multi_items():
            grouped.setdefault(name, []).append(value)
        return {name: values[0] if len(values) == 1 else values for name, values in grouped.items()}

    @staticmethod
    def _is_cacheable(response: Response) -> bool:
        content_type = response.headers.get("content-type", "")
        return response.status_code == 200 and content_type.startswith("application/json")


def add_response_cache_middleware(
    app,
    cache: CacheManager | None = None,
    ttl: float | None = None,
    excluded_paths: Iterable[str] = (),
    tag_resolver: TagResolver | None = None,
):
    """
    Add the response cache middleware to the FastAPI application.

    USAGE:
    ------
        app = FastAPI()
        add_response_cache_middleware(app, ttl=120, excluded_paths=["/api/v1/admin"])
    """
    excluded_paths = tuple(excluded_paths)
    app.add_middleware(
        ResponseCacheMiddleware,
        cache=cache,
        ttl=ttl,
        excluded_paths=excluded_paths,
        tag_resolver=tag_resolver,
    )
    logger.info("Response cache middleware registered", ttl=ttl, excluded_paths=list(excluded_paths))
