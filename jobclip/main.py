from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from dotenv import load_dotenv
from contextlib import asynccontextmanager
import logging
import traceback

from jobclip import __version__
from jobclip.config import Settings, get_env_presence
from jobclip.app.messages import router as messages_router
from jobclip.extractors import get_extractor_registry

load_dotenv()

logging.basicConfig(level=Settings.log_level())
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Handle application lifecycle events."""
    registry = get_extractor_registry()
    logger.info(f"[jobclip] env: JOBCLIP_ENV={Settings.env()}, {len(registry)} extractors registered")
    yield


app = FastAPI(title="jobclip API", version=__version__, lifespan=lifespan)


@app.middleware("http")
async def error_masking_middleware(request: Request, call_next):
    """Unhandled route errors become a JSON 500; details are shown only in dev."""
    try:
        return await call_next(request)
    except Exception as e:
        logger.error(f"[jobclip] Unhandled error on {request.method} {request.url.path}: {e}", exc_info=True)
        content = {"status": "error", "error": "An internal error occurred. Please try again later."}
        if Settings.is_dev():
            content["error"] = str(e)
            content["traceback"] = traceback.format_exc()
        return JSONResponse(status_code=500, content=content)


app.add_middleware(
    CORSMiddleware,
    allow_origin_regex=r"(chrome-extension://.*|http://(localhost|127\.0\.0\.1)(:\d+)?)",
    allow_credentials=True,
    allow_methods=["GET", "POST", "OPTIONS"],
    allow_headers=["*"],
)

app.include_router(messages_router)


@app.get("/api/healthz")
def health():
    return {
        "status": "ok",
        "version": __version__,
        "extractors": len(get_extractor_registry()),
    }


@app.get("/api/capabilities")
def capabilities():
    return {
        "settings": Settings.get_status(),
        "env": get_env_presence(),
    }
