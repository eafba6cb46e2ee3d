from fastapi import FastAPI
from fastapi.openapi.utils import get_openapi

from lead_validator.api.routes.requisition import router as requisition_router
from lead_validator.api.routes.validate import router as validate_router
from lead_validator.core.config import get_settings
from lead_validator.core.logger import setup_logging

settings = get_settings()
setup_logging(settings.log_level)

app = FastAPI(
    title=f"{settings.app_name} (Lead Verification Service)",
    description="Deterministic lead verification against job requisition requirements and data quality rules",
    version="0.1.0",
    docs_url="/docs",
    redoc_url="/redoc",
    openapi_url="/openapi.json"
)

app.include_router(validate_router)
app.include_router(requisition_router)

@app.get("/", tags=["health"])
def root():
    return {"service": "lead-validator", "status": "running"}

@app.get("/health", tags=["health"])
def health():
    return {"status": "ok"}

def custom_openapi():
    """Generate OpenAPI schema with custom settings."""
    if app.openapi_schema:
        return app.openapi_schema
    openapi_schema = get_openapi(
        title="Lead Validator API",
        version="0.1.0",
        description="Lead verification API: VALID / INVALID / RECHECK verdicts with comments",
        routes=app.routes,
    )
    app.openapi_schema = openapi_schema
    return app.openapi_schema

app.openapi = custom_openapi
