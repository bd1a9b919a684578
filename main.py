import logging
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from contextlib import asynccontextmanager

from app.core.config import settings
from app.core.database import create_db_engine, create_session_factory, init_db
from app.core.exceptions import AppError
from app.core.logging_config import setup_logging
from app.api.endpoints import auth, health, jobs

setup_logging(log_level=settings.LOG_LEVEL, json_logs=settings.JSON_LOGS)
logger = logging.getLogger(__name__)

# Request locations FastAPI prefixes onto validation error paths
_REQUEST_LOCATIONS = {"body", "query", "path", "header"}


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Lifespan context manager for startup and shutdown events.

    The database engine (and its connection pool) is created here and handed
    to request handlers through app.state.
    """
    logger.info("Starting up Job Application Tracker API...")
    engine = create_db_engine(settings.SQLALCHEMY_DATABASE_URI)
    app.state.engine = engine
    app.state.session_factory = create_session_factory(engine)
    init_db(engine, create_tables=settings.CREATE_TABLES)
    logger.info("Database initialized successfully")

    yield

    logger.info("Shutting down Job Application Tracker API...")
    engine.dispose()


app = FastAPI(
    title=settings.PROJECT_NAME,
    version="1.0.0",
    description="Track job applications per user, with JWT authentication",
    lifespan=lifespan
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.BACKEND_CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(AppError)
async def app_error_handler(request: Request, exc: AppError):
    """Render service errors as {"message": ...} with their status code."""
    return JSONResponse(
        status_code=exc.status_code,
        content={"message": exc.message},
        headers=exc.headers,
    )


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    """Report malformed requests as 400 with a readable summary."""
    problems = []
    for error in exc.errors():
        if error.get("type") == "json_invalid":
            problems.append("Malformed JSON body")
            continue
        field = ".".join(str(part) for part in error.get("loc", ()) if part not in _REQUEST_LOCATIONS)
        problems.append(f"{field}: {error['msg']}" if field else error["msg"])

    return JSONResponse(
        status_code=400,
        content={"message": "; ".join(problems) or "Invalid request"},
    )


@app.exception_handler(Exception)
async def unhandled_error_handler(request: Request, exc: Exception):
    """Log unexpected failures and hide their detail from the caller."""
    logger.exception(f"Unhandled error on {request.method} {request.url.path}")
    return JSONResponse(status_code=500, content={"message": "Server error"})


# Include routers
app.include_router(auth.router, prefix=settings.API_PREFIX)
app.include_router(jobs.router, prefix=settings.API_PREFIX)
app.include_router(health.router)


@app.get("/")
async def root():
    """Root endpoint - API health check"""
    return {
        "message": settings.PROJECT_NAME,
        "version": "1.0.0",
        "status": "healthy"
    }


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "main:app",
        host="0.0.0.0",
        port=settings.PORT,
        log_level=settings.LOG_LEVEL.lower()
    )
