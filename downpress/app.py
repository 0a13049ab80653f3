from __future__ import annotations

from fastapi import APIRouter, FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware

from downpress import __version__
from downpress.api.health import health as _health_handler
from downpress.api.routers.courses import router as courses_router
from downpress.api.routers.games import router as games_router
from downpress.api.routers.share import router as share_router
from downpress.config import cors_allow_origins
from downpress.metrics import MetricsMiddleware, metrics_app

app = FastAPI(title="downpress", version=__version__)

app.add_middleware(
    CORSMiddleware,
    allow_origins=cors_allow_origins(),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.add_middleware(MetricsMiddleware)

app.include_router(games_router)
app.include_router(share_router)
app.include_router(courses_router)
app.add_api_route(
    "/health",
    _health_handler,
    methods=["GET"],
    response_model=None,
    tags=["health"],
)


_metrics_router = APIRouter()


@_metrics_router.get("/metrics", include_in_schema=False)
async def _metrics_endpoint(request: Request):
    return await metrics_app(request)


app.include_router(_metrics_router)
