import structlog
import uvicorn
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from .api.routes_status import router as status_router
from .api.routes_words import router as words_router
from .config import configure_logging, settings
from .core.database import Base, engine, SessionLocal, ensure_word_schema
from .core.errors import KelimeError
from .core.seed import seed_initial_data

configure_logging(settings.environment, settings.log_level)
logger = structlog.get_logger(__name__)


app = FastAPI(
    title=settings.app_name,
    version="0.1.0",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=False,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(KelimeError)
async def kelime_error_handler(request: Request, exc: KelimeError):
    log = logger.error if exc.status_code >= 500 else logger.info
    log(
        "request_failed",
        path=request.url.path,
        error=type(exc).__name__,
        status_code=exc.status_code,
        message=exc.message,
    )
    return JSONResponse(status_code=exc.status_code, content={"error": exc.message})


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    parts = []
    for err in exc.errors():
        field = ".".join(str(p) for p in err["loc"][1:]) or str(err["loc"][0])
        parts.append(f"{field}: {err['msg']}")
    message = "; ".join(parts)
    logger.info("request_invalid", path=request.url.path, message=message)
    return JSONResponse(status_code=400, content={"error": message})


@app.on_event("startup")
async def startup_event():
    # Create tables, then add columns older databases lack
    Base.metadata.create_all(bind=engine)
    ensure_word_schema(engine)

    # Seed if empty
    if settings.seed_sample_words:
        db = SessionLocal()
        try:
            added = seed_initial_data(db)
        finally:
            db.close()
        if added:
            logger.info("sample_words_seeded", count=added)

    logger.info("startup_complete", api=f"http://{settings.host}:{settings.port}/api/words")


app.include_router(words_router)
app.include_router(status_router)


def run() -> None:
    uvicorn.run("kelime.main:app", host=settings.host, port=settings.port)
