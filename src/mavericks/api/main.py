from __future__ import annotations

import asyncio
import logging
from datetime import UTC, datetime
from pathlib import Path
from typing import Optional

from fastapi import FastAPI, Request, Response
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import FileResponse, JSONResponse
from prometheus_client import CONTENT_TYPE_LATEST, REGISTRY, generate_latest

from ..config import SERVICE_NAME, Settings, load_settings
from ..observability.metrics import metrics_middleware_factory
from ..services.brand_context_store import BrandContextStore
from ..services.content_generator import ContentGenerator
from ..services.llm_client import OpenAIChatClient
from .routers.chat import router as chat_router


logger = logging.getLogger("mavericks.api")


def request_timeout_middleware_factory(timeout_seconds: float):
    async def middleware(request: Request, call_next):
        try:
            return await asyncio.wait_for(call_next(request), timeout=timeout_seconds)
        except asyncio.TimeoutError:
            logger.warning("request_timeout", extra={"path": request.url.path, "timeout_s": timeout_seconds})
            return JSONResponse(
                status_code=408,
                content={
                    "success": False,
                    "error": f"Request timeout - response took longer than {int(timeout_seconds)} seconds",
                },
            )

    return middleware


def _mount_client(app: FastAPI, client_dir: Path) -> None:
    root = client_dir.resolve()
    index = root / "index.html"

    @app.get("/{full_path:path}", include_in_schema=False)
    def spa(full_path: str) -> FileResponse:
        candidate = (root / full_path).resolve()
        if full_path and candidate.is_file() and candidate.is_relative_to(root):
            return FileResponse(candidate)
        return FileResponse(index)


def create_app(
    settings: Optional[Settings] = None,
    store: Optional[BrandContextStore] = None,
    generator: Optional[ContentGenerator] = None,
) -> FastAPI:
    settings = settings or load_settings()
    app = FastAPI(title="Marketing Mavericks Agent API", version="0.1.0")

    app.state.settings = settings
    app.state.brand_store = store if store is not None else BrandContextStore()
    app.state.generator = generator or ContentGenerator(OpenAIChatClient.from_settings(settings))

    # Last registered runs outermost: metrics must also observe 408 responses
    app.middleware("http")(request_timeout_middleware_factory(settings.request_timeout_seconds))
    app.middleware("http")(metrics_middleware_factory())

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.get("/api/health")
    def api_health():
        return {
            "status": "ok",
            "timestamp": datetime.now(UTC).isoformat(timespec="milliseconds").replace("+00:00", "Z"),
            "service": SERVICE_NAME,
        }

    @app.get("/api/metrics")
    def api_metrics() -> Response:
        data = generate_latest(REGISTRY)
        return Response(content=data, media_type=CONTENT_TYPE_LATEST)

    app.include_router(chat_router, prefix="/api")

    if settings.is_production:
        client_dir = Path(settings.client_dir)
        if (client_dir / "index.html").is_file():
            _mount_client(app, client_dir)
        else:
            logger.warning("client_bundle_missing", extra={"client_dir": str(client_dir)})

    return app


logging.basicConfig(level=logging.INFO)

app = create_app()
