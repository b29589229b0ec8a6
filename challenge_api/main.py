from contextlib import asynccontextmanager
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import ORJSONResponse
from .config import settings
from .core.events import startup_event, shutdown_event
from .database import DatabaseManager
from .routes import api_router, health
from .logger import get_logger

logger = get_logger()

@asynccontextmanager
async def lifespan(app: FastAPI):
    await startup_event(app)
    yield
    await shutdown_event(app)

async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """Answer malformed input with 400 and a short message"""
    errors = exc.errors()
    # loc is ('body', field, ...) or ('query', name); union members add a trailing type tag
    fields = sorted({
        str(error['loc'][1] if len(error['loc']) > 1 else error['loc'][0])
        for error in errors if error.get('loc')
    })
    detail = f"Invalid or missing fields: {', '.join(fields)}" if fields else "Invalid request"
    logger.warning(f"Rejected {request.method} {request.url.path}: {detail}")
    return ORJSONResponse(status_code=400, content={"detail": detail})

def create_app(db: DatabaseManager = None) -> FastAPI:
    app = FastAPI(
        default_response_class=ORJSONResponse,
        title=settings.title,
        description="Players, logged books and rankings for the reading challenge",
        version="1.0.0",
        lifespan=lifespan
    )
    app.state.db = db or DatabaseManager()

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origin_list,
        allow_methods=["*"],
        allow_headers=["*"]
    )
    app.add_exception_handler(RequestValidationError, validation_exception_handler)

    app.include_router(api_router)
    app.include_router(health.router, tags=["health"])
    return app

app = create_app()

if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "challenge_api.main:app",
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower()
    )
