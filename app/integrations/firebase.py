"""
Firebase integration: Firestore (listings, impact data) and Cloud Storage
(listing images).

`db` and `bucket` start as None. Call `initialize()` inside the FastAPI
lifespan context manager before handling any requests.
"""

import os
import json
import logging
import firebase_admin
from firebase_admin import credentials, firestore, storage

logger = logging.getLogger(__name__)

# Module-level references. Set by initialize(); all consuming modules reference
# these at call time via `from app.integrations import firebase; firebase.db`.
db = None  # firestore.Client | None
bucket = None  # google.cloud.storage.Bucket | None


def initialize() -> None:
    """Initialize Firebase Admin SDK and set the module-level `db` and `bucket` clients."""
    global db, bucket

    bucket_name = os.getenv("FIREBASE_STORAGE_BUCKET")
    options = {"storageBucket": bucket_name} if bucket_name else None

    if not firebase_admin._apps:
        service_account_json = os.getenv("FIREBASE_SERVICE_ACCOUNT")
        if service_account_json:
            try:
                sa_info = json.loads(service_account_json)
                cred = credentials.Certificate(sa_info)
                firebase_admin.initialize_app(cred, options)
            except Exception as e:
                logger.error(f"Error initializing Firebase with service account: {e}")
                firebase_admin.initialize_app(options=options)
        else:
            firebase_admin.initialize_app(options=options)

    db = firestore.client()

    if bucket_name:
        bucket = storage.bucket()
        logger.info(f"[STARTUP] Firebase initialized (bucket: {bucket_name})")
    else:
        logger.warning("[STARTUP] FIREBASE_STORAGE_BUCKET not set. Listing uploads are disabled.")
