# app/utils/storage.py
import logging
import mimetypes
from functools import lru_cache
from uuid import uuid4

import boto3

from app.core.config import settings

logger = logging.getLogger(__name__)


@lru_cache(maxsize=1)
def get_s3_client():
    return boto3.client(
        "s3",
        aws_access_key_id=settings.AWS_ACCESS_KEY_ID,
        aws_secret_access_key=settings.AWS_SECRET_ACCESS_KEY,
        region_name=settings.AWS_REGION,
    )


def object_url(key: str) -> str:
    return f"https://{settings.BUCKET_NAME}.s3.{settings.AWS_REGION}.amazonaws.com/{key}"


def upload_image(s3_client, data: bytes, content_type: str) -> dict:
    """Store image bytes under the upload folder and return its public URL and key."""
    ext = mimetypes.guess_extension(content_type) or ""
    key = f"{settings.UPLOAD_FOLDER}/{uuid4().hex}{ext}"
    s3_client.put_object(
        Bucket=settings.BUCKET_NAME,
        Key=key,
        Body=data,
        ContentType=content_type,
    )
    logger.info("Uploaded image to s3://%s/%s", settings.BUCKET_NAME, key)
    return {"url": object_url(key), "key": key}
