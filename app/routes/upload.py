# app/routes/upload.py
import logging
from typing import Optional

from botocore.exceptions import BotoCoreError, ClientError
from fastapi import APIRouter, Depends, File, UploadFile

from app.core.config import settings
from app.core.error_messages import ErrorResponses
from app.middleware.rbac import get_current_admin
from app.utils.storage import get_s3_client, upload_image

logger = logging.getLogger(__name__)

upload_router = APIRouter(tags=["Upload"])


@upload_router.post("")
async def upload(
    image: Optional[UploadFile] = File(None),
    s3_client=Depends(get_s3_client),
    admin=Depends(get_current_admin),
):
    if image is None:
        raise ErrorResponses.NO_IMAGE
    if not (image.content_type or "").startswith("image/"):
        raise ErrorResponses.NOT_AN_IMAGE

    data = await image.read()
    if len(data) > settings.MAX_UPLOAD_BYTES:
        raise ErrorResponses.IMAGE_TOO_LARGE

    try:
        return upload_image(s3_client, data, image.content_type)
    except (BotoCoreError, ClientError) as e:
        logger.error("Upload error: %s", e)
        raise ErrorResponses.UPLOAD_FAILED
