"""Entry point for the FastAPI-powered Stremio addon."""

from __future__ import annotations

import json
import logging
from contextlib import AsyncExitStack, asynccontextmanager
from typing import Any

import httpx
from fastapi import FastAPI, HTTPException, Query, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from .config import settings
from .errors import CatalogError
from .services.catalog import CatalogService, ManifestConfig
from .services.trakt import TraktClient

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

CONTENT_TYPES = frozenset({"movie", "series"})

app: FastAPI


@asynccontextmanager
async def lifespan(fastapi_app: FastAPI):
    async with AsyncExitStack() as exit_stack:
        trakt_http_client = await exit_stack.enter_async_context(
            httpx.AsyncClient(
                base_url=str(settings.trakt_api_url),
                timeout=httpx.Timeout(settings.trakt_timeout_seconds),
            )
        )
        trakt = TraktClient(settings, trakt_http_client)
        install_catalog_service(fastapi_app, CatalogService(settings, trakt))
        logger.info("Catalog service ready, Trakt API at %s", settings.trakt_api_url)
        try:
            yield
        finally:  # pragma: no cover - teardown path exercised at runtime
            fastapi_app.state.catalog_service = None


def create_app() -> FastAPI:
    fastapi_app = FastAPI(
        title=settings.app_name,
        description="Trakt lists and trending titles as Stremio catalogs",
        version="0.0.1",
        lifespan=lifespan,
    )

    fastapi_app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["GET", "POST"],
        allow_headers=["*"],
    )

    register_routes(fastapi_app)
    return fastapi_app


def install_catalog_service(fastapi_app: FastAPI, service: CatalogService) -> None:
    """Attach ``service`` to the app; it may only be installed once."""

    if getattr(fastapi_app.state, "catalog_service", None) is not None:
        raise RuntimeError("Catalog service is already initialised")
    fastapi_app.state.catalog_service = service


def get_catalog_service(app: FastAPI) -> CatalogService:
    service = getattr(app.state, "catalog_service", None)
    if not isinstance(service, CatalogService):
        raise RuntimeError("Catalog service not initialised")
    return service


def register_routes(fastapi_app: FastAPI) -> None:
    @fastapi_app.get("/health")
    async def healthcheck() -> dict[str, str]:
        return {"status": "ok"}

    @fastapi_app.get("/{config}/manifest.json")
    async def manifest(config: str) -> dict[str, Any]:
        service = get_catalog_service(fastapi_app)
        try:
            manifest_config = ManifestConfig.from_segment(config)
            return service.build_manifest(manifest_config)
        except CatalogError as exc:
            raise HTTPException(status_code=exc.status_code, detail=str(exc)) from exc

    @fastapi_app.get("/{config}/catalog/{content_type}/{catalog_path:path}")
    async def catalog(
        request: Request, config: str, content_type: str, catalog_path: str
    ) -> JSONResponse:
        if content_type not in CONTENT_TYPES:
            raise HTTPException(status_code=400, detail="Unsupported content type")
        service = get_catalog_service(fastapi_app)
        raw_path = _raw_catalog_path(request, content_type) or catalog_path
        try:
            payload = await service.get_catalog_payload(raw_path)
        except CatalogError as exc:
            logger.warning("Catalog request %s failed: %s", raw_path, exc)
            raise HTTPException(status_code=exc.status_code, detail=str(exc)) from exc
        return JSONResponse(payload)

    @fastapi_app.get("/trakt-genres")
    async def trakt_genres(
        content_type: str = Query(default="movie", alias="type"),
    ) -> JSONResponse:
        if content_type not in CONTENT_TYPES:
            raise HTTPException(status_code=400, detail="Unsupported content type")
        service = get_catalog_service(fastapi_app)
        try:
            genres = await service.list_genres(content_type)  # type: ignore[arg-type]
        except CatalogError as exc:
            raise HTTPException(status_code=exc.status_code, detail=str(exc)) from exc
        return JSONResponse(genres)

    @fastapi_app.get("/trakt/extract-list-id")
    async def trakt_list_id(url: str | None = None) -> dict[str, str]:
        if not url:
            raise HTTPException(status_code=400, detail="Missing url parameter")
        service = get_catalog_service(fastapi_app)
        try:
            list_id = await service.resolve_list_id(url)
        except CatalogError as exc:
            raise HTTPException(status_code=exc.status_code, detail=str(exc)) from exc
        return {"id": list_id}

    @fastapi_app.post("/api/catalogs/encode")
    async def encode_catalog(request: Request) -> dict[str, str]:
        service = get_catalog_service(fastapi_app)
        try:
            payload = await request.json()
        except json.JSONDecodeError as exc:
            raise HTTPException(status_code=400, detail="Invalid payload") from exc
        if not isinstance(payload, dict):
            raise HTTPException(status_code=400, detail="Invalid payload")
        try:
            token = service.encode_catalog(payload)
        except CatalogError as exc:
            raise HTTPException(status_code=exc.status_code, detail=str(exc)) from exc
        return {"id": token}


def _raw_catalog_path(request: Request, content_type: str) -> str | None:
    """Return the still percent-encoded catalog path from the request."""

    raw_path = request.scope.get("raw_path")
    if not raw_path:
        return None
    path = raw_path.decode("latin-1").split("?", 1)[0]
    marker = f"/catalog/{content_type}/"
    if marker not in path:
        return None
    return path.split(marker, 1)[1]


app = create_app()


if __name__ == "__main__":  # pragma: no cover - manual execution
    import uvicorn

    uvicorn.run(
        "app.main:app",
        host=settings.server_host,
        port=settings.server_port,
        reload=settings.environment == "development",
    )
