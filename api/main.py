import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from cards import router as cards_router
from cards.service import MalformedFieldError
from core import config
from core.airtable import AirtableClient, AirtableError

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    # One Airtable client (and connection pool) per process.
    settings = config.load_settings()
    config.configure_logging(settings.log_level)
    app.state.airtable = AirtableClient(
        api_key=settings.airtable_api_key,
        base_id=settings.airtable_base_id,
        api_url=settings.airtable_api_url,
        timeout_s=settings.airtable_timeout_s,
    )
    try:
        yield
    finally:
        await app.state.airtable.aclose()
        app.state.airtable = None


app = FastAPI(lifespan=lifespan)

# Allow a local frontend dev server to call this API from the browser.
app.add_middleware(
    CORSMiddleware,
    allow_origins=list(config.cors_allow_origins()),
    allow_methods=["GET", "POST"],
    allow_headers=["*"],
)

app.include_router(cards_router.router, tags=["cards"])


@app.exception_handler(AirtableError)
async def airtable_error_handler(_: Request, exc: AirtableError) -> JSONResponse:
    logger.error("airtable_fetch_failed error=%s", exc)
    return JSONResponse(status_code=502, content={"detail": str(exc)})


@app.exception_handler(MalformedFieldError)
async def malformed_field_handler(_: Request, exc: MalformedFieldError) -> JSONResponse:
    logger.error("malformed_field record_id=%s field=%s", exc.record_id, exc.field)
    return JSONResponse(status_code=502, content={"detail": str(exc)})


@app.get("/health")
def health() -> dict:
    return {"status": "ok"}


@app.get("/")
def root() -> dict:
    return {"message": "card catalog api"}
