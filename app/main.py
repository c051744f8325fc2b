"""FastAPI application entry point."""

from fastapi import FastAPI
from fastapi.responses import JSONResponse

from app.api import router as api_router
from app.core.config import get_settings

app = FastAPI(
    title="Sales Enablement Engine",
    description="Deals, content library and asset recommendations over Supabase",
    version="0.1.0",
)


@app.get("/health")
async def health_check() -> JSONResponse:
    """Health check endpoint."""
    settings = get_settings()
    return JSONResponse(
        content={
            "status": "ok",
            "env": settings.APP_ENV,
            "hubspot_demo_mode": not settings.HUBSPOT_ACCESS_TOKEN,
        },
        status_code=200,
    )


# Include v1 API router
app.include_router(api_router, prefix="/v1", tags=["v1"])
