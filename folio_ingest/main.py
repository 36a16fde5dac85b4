from fastapi import FastAPI
from fastapi.openapi.utils import get_openapi

from folio_ingest.api.routes.linkedin import router as linkedin_router
from folio_ingest.api.routes.parse import router as parse_router
from folio_ingest.api.routes.profile import router as profile_router
from folio_ingest.config import get_settings
from folio_ingest.logging_setup import init_logging

init_logging()

app = FastAPI(
    title="Folio Ingest (Profile Import Service)",
    description="Deterministic resume text segmentation and LinkedIn payload mapping into a portfolio profile record",
    version="0.1.0",
    docs_url="/docs",
    redoc_url="/redoc",
    openapi_url="/openapi.json"
)

app.include_router(parse_router)
app.include_router(linkedin_router)
app.include_router(profile_router)

@app.get("/", tags=["health"])
def root():
    return {"service": get_settings().service_name, "status": "running"}

@app.get("/health", tags=["health"])
def health():
    return {"status": "ok"}

def custom_openapi():
    """Generate OpenAPI schema with custom settings."""
    if app.openapi_schema:
        return app.openapi_schema
    openapi_schema = get_openapi(
        title="Folio Ingest API",
        version="0.1.0",
        description="Resume parsing and LinkedIn import for the portfolio builder",
        routes=app.routes,
    )
    app.openapi_schema = openapi_schema
    return app.openapi_schema

app.openapi = custom_openapi
