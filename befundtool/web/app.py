"""FastAPI application factory."""

from fastapi import FastAPI

from befundtool.config import settings

app = FastAPI(title="BefundTool", version=settings.app_version, docs_url=None, redoc_url=None)

from befundtool.web.routes import api, corrections, reports, settings as settings_routes, templates  # noqa: E402

app.include_router(api.router)
app.include_router(templates.router)
app.include_router(corrections.router)
app.include_router(reports.router)
app.include_router(settings_routes.router)
