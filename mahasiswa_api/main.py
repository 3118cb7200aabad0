from __future__ import annotations

import structlog
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from mahasiswa_api.api.errors import register_exception_handlers
from mahasiswa_api.api.health import router as health_router
from mahasiswa_api.api.mahasiswa import router as mahasiswa_router
from mahasiswa_api.api.metrics import router as metrics_router
from mahasiswa_api.config import get_settings
from mahasiswa_api.db.session import check_connection, dispose_engine
from mahasiswa_api.observability import RequestContextMiddleware, configure_logging
from mahasiswa_api.observability.middleware import route_templates

ROUTERS = (health_router, mahasiswa_router, metrics_router)

app = FastAPI(title="Mahasiswa API", version="1.0.0")
app.add_middleware(
    CORSMiddleware,
    allow_origins=get_settings().cors_origin_list,
    allow_methods=["*"],
    allow_headers=["*"],
    expose_headers=["X-Request-ID"],
)
# Added last so it wraps CORS and sees every response.
app.add_middleware(RequestContextMiddleware, route_templates=route_templates(ROUTERS))
register_exception_handlers(app)

for router in ROUTERS:
    app.include_router(router)


@app.on_event("startup")
def _startup() -> None:
    settings = get_settings()
    configure_logging(settings.log_level)

    logger = structlog.get_logger("startup")
    try:
        check_connection()
    except Exception as exc:
        # The API still starts; requests will answer 500 until the database is reachable.
        logger.warning("database.unavailable", error=str(exc))
    else:
        logger.info("database.connected")


@app.on_event("shutdown")
def _shutdown() -> None:
    dispose_engine()
