import logging
import uuid

import boto3
from botocore.config import Config
from botocore.exceptions import BotoCoreError, ClientError
from fastapi import HTTPException, UploadFile

from .config import R2_ACCESS_KEY_ID, R2_ACCOUNT_ID, R2_BUCKET_NAME, R2_PUBLIC_URL, R2_SECRET_ACCESS_KEY

logger = logging.getLogger(__name__)

MAX_IMAGE_BYTES = 5 * 1024 * 1024

# Allowed image types for catalog pictures
ALLOWED_IMAGE_TYPES = {
    "image/png": "png",
    "image/jpeg": "jpg",
    "image/jpg": "jpg",
    "image/webp": "webp",
    "image/gif": "gif",
}


def get_r2_client():
    """Create and return an R2 client."""
    return boto3.client(
        "s3",
        endpoint_url=f"https://{R2_ACCOUNT_ID}.r2.cloudflarestorage.com",
        aws_access_key_id=R2_ACCESS_KEY_ID,
        aws_secret_access_key=R2_SECRET_ACCESS_KEY,
        config=Config(signature_version="s3v4"),
    )


def public_url(key: str) -> str:
    return f"{R2_PUBLIC_URL}/{key}" if R2_PUBLIC_URL else key


async def upload_service_image(service_id: str, file: UploadFile) -> str:
    """Store a catalog image and return its public URL"""
    extension = ALLOWED_IMAGE_TYPES.get(file.content_type or "")
    if not extension:
        raise HTTPException(
            status_code=400,
            detail="Tipo de archivo no válido. Solo se permiten imágenes PNG, JPEG, WebP y GIF.",
        )

    content = await file.read()
    if not content:
        raise HTTPException(status_code=400, detail="El archivo está vacío")
    if len(content) > MAX_IMAGE_BYTES:
        raise HTTPException(status_code=400, detail="La imagen no debe superar los 5MB")

    key = f"services/{service_id}/{uuid.uuid4().hex}.{extension}"
    try:
        get_r2_client().put_object(
            Bucket=R2_BUCKET_NAME,
            Key=key,
            Body=content,
            ContentType=file.content_type,
        )
    except (BotoCoreError, ClientError) as e:
        logger.error(f"❌ Failed to upload image for service {service_id}: {e}")
        raise HTTPException(status_code=502, detail="Error al subir imagen") from e

    logger.info(f"✅ Uploaded service image to R2: {key}")
    return public_url(key)
