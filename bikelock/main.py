import logging
from contextlib import asynccontextmanager

import uvicorn
import yaml
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError

from bikelock.infrastructure.config import settings
from bikelock.infrastructure.database import SessionLocal, init_db
from bikelock.presentation.routers import failure_response, router
from bikelock.services.bikelock_service import reset_state_service

logging.basicConfig(level=settings.log_level, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    On startup the bike is locked with no reservation and no ride history
    """
    db = SessionLocal()
    try:
        reset_state_service(db)
    finally:
        db.close()
    yield


app = FastAPI(title="Bike Lock Controller", lifespan=lifespan)


# Use the contractual schema
def custom_openapi():
    with open(settings.openapi_path) as f:
        return yaml.safe_load(f)


@app.middleware("http")
async def log_requests(request: Request, call_next):
    logger.info("%s %s", request.method, request.url.path)
    return await call_next(request)


@app.exception_handler(RequestValidationError)
async def _request_validation_error(request: Request, exc: RequestValidationError):
    errors = exc.errors()
    if errors:
        first = errors[0]
        field = ".".join(str(part) for part in first.get("loc", ()) if part != "body")
        message = f"Invalid {field}: {first.get('msg')}" if field else str(first.get("msg"))
    else:
        message = "Invalid request"
    return failure_response(message)


@app.exception_handler(Exception)
async def _unhandled_error(request: Request, exc: Exception):
    logger.error("Unhandled error on %s %s", request.method, request.url.path, exc_info=exc)
    return failure_response("Internal server error", status_code=500)


app.openapi = custom_openapi
init_db()
app.include_router(router)


if __name__ == "__main__":
    logger.info("Server running on http://localhost:%d", settings.port)
    logger.info("Lock device endpoint: http://localhost:%d/api/lock-status", settings.port)
    uvicorn.run(app, host=settings.host, port=settings.port)
