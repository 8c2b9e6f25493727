"""
System / health routes.
"""

from fastapi import APIRouter
from fastapi.responses import PlainTextResponse

from app.integrations import firebase as firebase_module
from app.integrations import redis_client as redis_module
from app.integrations import rekognition as rekognition_module

router = APIRouter(tags=["System"])


@router.get("/health")
async def health():
    return {
        "status": "healthy",
        "dependencies": {
            "firestore": firebase_module.db is not None,
            "storage": firebase_module.bucket is not None,
            "rekognition": rekognition_module.client is not None,
            "redis": redis_module.is_reachable(),
        },
    }


@router.get("/robots.txt", response_class=PlainTextResponse)
def robots():
    return "User-agent: *\nDisallow: /"
