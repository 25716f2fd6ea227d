"""FastAPI application entry point."""

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from munin.analytics.router import router as analytics_router
from munin.config import get_settings
from munin.dependencies import logger
from munin.links.router import router as links_router
from munin.search.router import router as search_router

settings = get_settings()

app = FastAPI(title="Munin Core", version="0.1.0")

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.allowed_origins_list,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(search_router)
app.include_router(links_router)
app.include_router(analytics_router)


@app.get("/health")
async def health() -> dict[str, str]:
    """Health check endpoint."""
    return {
        "status": "healthy",
        "version": "0.1.0",
        "vault_path": str(settings.vault_path),
    }


@app.get("/")
async def root() -> dict[str, str]:
    """Root endpoint with API info."""
    return {"name": "Munin Core", "version": "0.1.0", "docs": "/docs"}


logger.info("app_startup", extra={"host": settings.host, "port": settings.port})
