from __future__ import annotations

import os

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from qrdine.api.error_handling import register_exception_handlers
from qrdine.api.middleware.access_log import AccessLogMiddleware
from qrdine.api.middleware.request_id import RequestIDMiddleware
from qrdine.api.routes.auth import router as auth_router
from qrdine.api.routes.carts import router as carts_router
from qrdine.api.routes.health import router as health_router
from qrdine.api.routes.menu import router as menu_router
from qrdine.api.routes.metrics import router as metrics_router
from qrdine.api.routes.orders import router as orders_router
from qrdine.api.routes.payments import router as payments_router
from qrdine.api.routes.restaurants import router as restaurants_router
from qrdine.api.routes.reviews import router as reviews_router
from qrdine.api.routes.table_qr import router as table_qr_router
from qrdine.api.routes.tables import router as tables_router
from qrdine.api.routes.uploads import router as uploads_router
from qrdine.api.routes.users import router as users_router
from qrdine.infrastructure.observability.logging_config import configure_logging
from qrdine.infrastructure.observability.otel import configure_otel


def _is_local_env() -> bool:
    return os.getenv("APP_ENV", "dev").lower() in {"dev", "test"}


def _cors_allow_origins() -> list[str]:
    # Dev/test: unblock everything (no credentials allowed)
    if _is_local_env():
        return ["*"]

    # Staging/prod: the customer and admin frontends, which send the auth cookie
    raw_value = os.getenv("CORS_ALLOW_ORIGINS", "http://localhost:3000")
    return [origin.strip() for origin in raw_value.split(",") if origin.strip()]


def create_app() -> FastAPI:
    configure_logging()

    app = FastAPI(title="QR Dine Backend", version="0.1.0")
    register_exception_handlers(app)
    app.include_router(health_router)
    app.include_router(metrics_router)
    app.include_router(auth_router)
    app.include_router(users_router)
    app.include_router(restaurants_router)
    app.include_router(menu_router)
    app.include_router(tables_router)
    app.include_router(table_qr_router)
    app.include_router(carts_router)
    app.include_router(payments_router)
    app.include_router(orders_router)
    app.include_router(reviews_router)
    app.include_router(uploads_router)

    app.add_middleware(AccessLogMiddleware)
    app.add_middleware(RequestIDMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=_cors_allow_origins(),
        allow_credentials=not _is_local_env(),
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=["X-Request-Id"],
    )

    configure_otel(app)
    return app


app = create_app()
