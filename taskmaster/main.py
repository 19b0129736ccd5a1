import logging

import uvicorn
from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from taskmaster import __version__
from taskmaster.config import settings
from taskmaster.db import close_db, engine_label, init_db
from taskmaster.routes import health, tasks
from taskmaster.services.task_service import TaskStorageError

# ---------------- Logging ----------------
logging.basicConfig(
    level=getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO),
    format="%(asctime)s | %(levelname)s | %(name)s | %(message)s",
)
logger = logging.getLogger("taskmaster-api")
logging.getLogger("uvicorn.access").setLevel(logging.WARNING)

# ---------------- FastAPI App ----------------
app = FastAPI(title="TaskMaster Pro API", version=__version__)

CORS_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Methods": "GET, POST, OPTIONS",
    "Access-Control-Allow-Headers": "Content-Type",
}

ENDPOINTS = (
    ("GET", "/api/tasks", "Fetch all tasks"),
    ("POST", "/api/tasks/save", "Save a new task"),
    ("POST", "/api/tasks/update", "Update task status"),
    ("POST", "/api/tasks/edit", "Update task details"),
    ("POST", "/api/tasks/delete", "Delete a task"),
)


# Answers browser preflight requests.
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["GET", "POST", "OPTIONS"],
    allow_headers=["Content-Type"],
)


def _is_preflight(request: Request) -> bool:
    return request.method == "OPTIONS" and "access-control-request-method" in request.headers


def _json_preflight(response) -> JSONResponse:
    """CORSMiddleware answers preflights in plain text; re-issue the answer as JSON."""
    accepted = response.status_code == status.HTTP_200_OK
    headers = {
        key: value
        for key, value in response.headers.items()
        if key.startswith("access-control-") or key == "vary"
    }
    return JSONResponse(
        status_code=response.status_code,
        content={"success": accepted, "message": "Preflight accepted" if accepted else "Preflight rejected"},
        headers=headers,
    )


# Registered after CORSMiddleware so it wraps it and sees every response.
@app.middleware("http")
async def stamp_headers(request: Request, call_next):
    response = await call_next(request)
    if _is_preflight(request):
        response = _json_preflight(response)
    response.headers.update(CORS_HEADERS)
    logger.info("%s %s -> %s", request.method, request.url.path, response.status_code)
    return response

app.include_router(tasks.router)
app.include_router(health.router)


# ---------------- Error mapping ----------------
@app.exception_handler(StarletteHTTPException)
async def http_error(request: Request, exc: StarletteHTTPException):
    if exc.status_code == status.HTTP_405_METHOD_NOT_ALLOWED:
        content = {"error": "Method not allowed"}
    else:
        content = {"error": exc.detail}
    return JSONResponse(status_code=exc.status_code, content=content, headers=exc.headers)


@app.exception_handler(RequestValidationError)
async def invalid_body(request: Request, exc: RequestValidationError):
    logger.warning("Rejected body | %s %s | %s", request.method, request.url.path, exc.errors())
    return JSONResponse(
        status_code=422,
        content={"error": "Invalid request body", "detail": jsonable_encoder(exc.errors())},
    )


@app.exception_handler(TaskStorageError)
async def storage_error(request: Request, exc: TaskStorageError):
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"success": False, "message": "Storage error"},
    )


# ---------------- Lifecycle ----------------
@app.on_event("startup")
def on_startup():
    url = settings.database_url()
    try:
        init_db(url, echo=settings.DB_ECHO, create_schema=settings.DB_CREATE_SCHEMA)
    except Exception:
        logger.exception("Database startup failed | %s", engine_label(url))
        raise

    logger.info("TaskMaster Pro API ready on port %s", settings.APP_PORT)
    for method, path, summary in ENDPOINTS:
        logger.info("  %-4s %s - %s", method, path, summary)


@app.on_event("shutdown")
def on_shutdown():
    logger.info("Shutting down server...")
    close_db()


def run() -> None:
    uvicorn.run(app, host=settings.APP_HOST, port=settings.APP_PORT)


if __name__ == "__main__":
    run()
