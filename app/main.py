import logging
from contextlib import asynccontextmanager

from dotenv import load_dotenv
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

# Load environment variables before any integration reads them
load_dotenv()

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

from app.api import impact, listings, system, verification  # noqa: E402
from app.integrations import firebase, http_client, redis_client, rekognition  # noqa: E402
from app.verification.errors import ImageUnavailableError  # noqa: E402


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup and shutdown events."""
    firebase.initialize()
    redis_client.initialize()
    rekognition.initialize()
    await http_client.initialize()
    yield
    await http_client.close()
    logger.info("[SHUTDOWN] Integrations closed")


app = FastAPI(title="Waste Listing Verification API", lifespan=lifespan)


# ---- Global Exception Handlers ----
# HTTP errors always carry CORS headers so the frontend can read the JSON body.
@app.exception_handler(StarletteHTTPException)
async def custom_http_exception_handler(request: Request, exc: StarletteHTTPException):
    headers = dict(getattr(exc, "headers", None) or {})
    headers["Access-Control-Allow-Origin"] = "*"
    headers["Access-Control-Allow-Credentials"] = "true"
    headers["Access-Control-Allow-Methods"] = "*"
    headers["Access-Control-Allow-Headers"] = "*"

    logger.info(f"[ERROR HANDLER] {request.method} {request.url.path} → {exc.status_code}: {exc.detail}")
    return JSONResponse(status_code=exc.status_code, content={"detail": exc.detail}, headers=headers)


@app.exception_handler(ImageUnavailableError)
async def image_unavailable_handler(request: Request, exc: ImageUnavailableError):
    logger.error(f"[VERIFY] Aborted, image unavailable ({exc.reason}): {exc.image_url}")
    return JSONResponse(
        status_code=503,
        content={"detail": {"code": "IMAGE_UNAVAILABLE", "message": "The image could not be retrieved for verification."}},
        headers={"Access-Control-Allow-Origin": "*"},
    )


# ---- CORS ----
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(system.router)
app.include_router(verification.router)
app.include_router(listings.router)
app.include_router(impact.router)
