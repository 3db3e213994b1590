from contextlib import asynccontextmanager
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError
from fastapi.openapi.utils import get_openapi
from starlette.exceptions import HTTPException as StarletteHTTPException
import uvicorn
import argparse
import logging
import os

from app.database.init_db import init_db
from app.api import api_router
from app.schemas import ErrorResponse, ErrorDetail
from app.schemas.errors import validation_errors_to_items

logger = logging.getLogger(__name__)

@asynccontextmanager
async def lifespan(app: FastAPI):
    """Lifespan events for the FastAPI application."""
    # Startup
    await init_db()
    yield

app = FastAPI(
    title="Alert Ledger Server",
    description="Stores alerts submitted by detection machines and serves them back with their events, metas and decisions",
    version="0.1.0",
    lifespan=lifespan,
    docs_url="/docs",
    redoc_url="/redoc",
    openapi_url="/openapi.json"
)

# Configure CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],  # For development - in production, specify allowed origins
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Health endpoint at the root level with its own tag
@app.get("/", tags=["Health"])
async def health_check():
    return {"status": "healthy", "service": "alert-ledger-server"}

# Include the API router which will include all endpoints organized by their type
app.include_router(api_router, prefix="/api")

@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    """Render every HTTP error as the {"error": ...} envelope."""
    error_response = ErrorResponse(error=str(exc.detail))
    return JSONResponse(
        status_code=exc.status_code,
        content=error_response.model_dump(mode="json", exclude_none=True),
        headers=getattr(exc, "headers", None)
    )

# Override the default validation error handler to provide better error responses
@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """
    Handle validation errors with a cleaner format.
    Shape violations are client errors, reported as 400 with every offending field.
    """
    error_response = ErrorResponse(
        error="Validation error",
        detail=ErrorDetail(errors=validation_errors_to_items(exc.errors()))
    )
    logger.warning(f"Rejected request to {request.url.path}: {len(error_response.detail.errors)} invalid field(s)")

    return JSONResponse(
        status_code=400,
        content=error_response.model_dump(mode="json")
    )

# Custom OpenAPI schema generation so documented errors match the envelope actually returned
def custom_openapi():
    if app.openapi_schema:
        return app.openapi_schema

    openapi_schema = get_openapi(
        title=app.title,
        version=app.version,
        description=app.description,
        routes=app.routes,
    )

    components = openapi_schema.setdefault("components", {})
    schemas = components.setdefault("schemas", {})

    # Remove the default ValidationError and HTTPValidationError schemas
    schemas.pop("ValidationError", None)
    schemas.pop("HTTPValidationError", None)
    schemas["ErrorResponse"] = ErrorResponse.model_json_schema(ref_template="#/components/schemas/{model}")
    for name, definition in schemas["ErrorResponse"].pop("$defs", {}).items():
        schemas[name] = definition

    # Replace 422 responses with 400 using our error format
    for path in openapi_schema.get("paths", {}).values():
        for method, operation in path.items():
            if method.lower() not in ["get", "post", "put", "delete", "patch"]:
                continue

            response_section = operation.setdefault("responses", {})
            response_section.pop("422", None)
            response_section["400"] = {
                "description": "Validation Error",
                "content": {
                    "application/json": {
                        "schema": {"$ref": "#/components/schemas/ErrorResponse"}
                    }
                }
            }

    app.openapi_schema = openapi_schema
    return app.openapi_schema

# Replace the default OpenAPI schema with our custom one
app.openapi = custom_openapi

def run_server():
    """Entry point for the alert-ledger-server console script."""
    parser = argparse.ArgumentParser(description="Run the Alert Ledger server")
    parser.add_argument("--host", default=os.environ.get("ALERT_LEDGER_HOST", "0.0.0.0"), help="Host to bind the server to")
    parser.add_argument("--port", type=int, default=int(os.environ.get("ALERT_LEDGER_PORT", 8000)),
                        help="Port to bind the server to (default: 8000)")
    parser.add_argument("--log-level", default=os.environ.get("ALERT_LEDGER_LOG_LEVEL", "INFO"),
                        help="Logging level (default: INFO)")
    parser.add_argument("--reload", action="store_true", help="Reload on code changes")
    args = parser.parse_args()

    logging.basicConfig(
        level=args.log_level.upper(),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    )

    uvicorn.run("app.main:app", host=args.host, port=args.port, reload=args.reload)

if __name__ == "__main__":
    run_server()
