import time

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from ats_api.core.db import init_db
from ats_api.core.logging import setup_logging
from ats_api.core.settings import get_settings
from ats_api.exceptions import HttpException, ValidationError
from ats_api.routers import router

# Initialize
settings = get_settings()
logger = setup_logging()

# Create app
app = FastAPI(
    title=settings.app_name,
    version="1.0.0",
    description="Applicant tracking API",
    debug=settings.debug,
)


# Exception handlers
def _format_validation_errors(errors: list) -> str:
    """Flatten pydantic errors to "field: message" pairs."""
    messages = []
    for error in errors:
        location = ".".join(str(part) for part in error.get("loc", ()) if part != "body")
        message = str(error.get("msg", ""))
        messages.append(f"{location}: {message}" if location else message)
    return ", ".join(messages)


@app.exception_handler(HttpException)
async def http_exception_handler(request: Request, exc: HttpException):
    if exc.status >= 500:
        logger.error(f"{request.method} {request.url.path} failed: {exc.message}")
    else:
        logger.info(f"{request.method} {request.url.path} -> {exc.status} {exc.message}")
    return JSONResponse(status_code=exc.status, content=exc.to_envelope())


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """Body validation errors use the same envelope as every other error, with a 400."""
    error = ValidationError(_format_validation_errors(exc.errors()))
    logger.info(f"{request.method} {request.url.path} -> 400 {error.message}")
    return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content=error.to_envelope())


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception):
    logger.error(
        f"Unhandled error on {request.method} {request.url.path}: {exc}",
        exc_info=exc,
        extra={"component": "api", "operation": request.url.path},
    )
    error = HttpException(status.HTTP_500_INTERNAL_SERVER_ERROR, "Something went wrong")
    return JSONResponse(status_code=error.status, content=error.to_envelope())


# Request logging middleware with timing
@app.middleware("http")
async def log_requests(request: Request, call_next):
    """Log all incoming HTTP requests with timing information."""
    start_time = time.perf_counter()

    logger.info(f">>> {request.method} {request.url.path}")
    logger.debug(f"    Client: {request.client.host if request.client else 'unknown'}")

    response = await call_next(request)

    duration_ms = (time.perf_counter() - start_time) * 1000
    response.headers["X-Response-Time"] = f"{duration_ms:.2f}ms"

    method = request.method
    path = request.url.path
    status_code = response.status_code
    time_str = f"{duration_ms:.2f}ms"

    if duration_ms < 100:
        logger.info(f"<<< {method} {path} - {status_code} [{time_str}]")
    elif duration_ms < 500:
        logger.info(f"<<< {method} {path} - {status_code} [{time_str}] (slow)")
    else:
        logger.warning(f"<<< {method} {path} - {status_code} [{time_str}] (very slow)")

    return response


# Add middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(router)


# Startup event
@app.on_event("startup")
async def startup_event():
    """Initialize services on startup."""
    logger.info("Starting up...")
    init_db()
    logger.info("Database initialized")


# Health check
@app.get("/health")
async def health_check():
    return {"status": "healthy", "service": settings.app_name}


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host="0.0.0.0", port=8000)
