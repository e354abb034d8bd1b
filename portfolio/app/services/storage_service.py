"""
S3 object storage for portfolio images.
Profile photos live under profile/{filename}, project covers under projects/{filename}.
Plain upload/list/delete - no versioning.
"""
import boto3
from botocore.exceptions import ClientError

from portfolio.app.core.config import STORAGE_FOLDERS, settings
from portfolio.app.core.logging_config import get_logger

logger = get_logger("services.storage")


def _get_s3_client():
    """Get configured S3 client."""
    if not settings.aws_access_key_id or not settings.aws_secret_access_key:
        raise ValueError("AWS credentials not configured (AWS_ACCESS_KEY_ID, AWS_SECRET_ACCESS_KEY)")
    return boto3.client(
        "s3",
        aws_access_key_id=settings.aws_access_key_id,
        aws_secret_access_key=settings.aws_secret_access_key,
        region_name=settings.aws_region,
    )


def _check_folder(folder: str) -> None:
    if folder not in STORAGE_FOLDERS:
        raise ValueError(f"Unknown storage folder: {folder}")


def object_url(key: str) -> str:
    return f"https://{settings.aws_bucket_name}.s3.{settings.aws_region}.amazonaws.com/{key}"


def upload_image(
    file_buffer: bytes,
    file_name: str,
    folder: str,
    mime_type: str = "application/octet-stream",
) -> dict:
    """
    Upload an image to {folder}/{file_name}. Re-uploading the same name overwrites it.

    Returns:
        dict with key, url
    """
    _check_folder(folder)
    key = f"{folder}/{file_name}"

    logger.info(
        "S3 upload started bucket=%s key=%s size_bytes=%d",
        settings.aws_bucket_name,
        key,
        len(file_buffer),
    )
    try:
        s3 = _get_s3_client()
        s3.put_object(
            Bucket=settings.aws_bucket_name,
            Key=key,
            Body=file_buffer,
            ContentType=mime_type,
        )
        url = object_url(key)
        logger.info("S3 upload success bucket=%s key=%s url=%s", settings.aws_bucket_name, key, url)
        return {"key": key, "url": url}
    except ClientError as e:
        code = e.response.get("Error", {}).get("Code", "")
        msg = e.response.get("Error", {}).get("Message", str(e))
        logger.error(
            "S3 upload failed bucket=%s key=%s error_code=%s error_message=%s",
            settings.aws_bucket_name,
            key,
            code,
            msg,
        )
        raise RuntimeError(f"S3 upload failed - {code}: {msg}") from e


def list_images(folder: str) -> list[str]:
    """Public URLs of every object under {folder}/."""
    _check_folder(folder)
    try:
        s3 = _get_s3_client()
        paginator = s3.get_paginator("list_objects_v2")
        urls = []
        for page in paginator.paginate(Bucket=settings.aws_bucket_name, Prefix=f"{folder}/"):
            for obj in page.get("Contents", []):
                urls.append(object_url(obj["Key"]))
        return urls
    except ClientError as e:
        logger.error("S3 list failed bucket=%s folder=%s error=%s", settings.aws_bucket_name, folder, e)
        raise RuntimeError(f"S3 list failed: {e}") from e


def parse_s3_key_from_url(url: str) -> str | None:
    """Extract the object key from one of our bucket URLs. None if not ours."""
    if not url or not url.startswith("http"):
        return None
    # https://bucket.s3.region.amazonaws.com/profile/photo.jpg
    parts = url.replace("https://", "").replace("http://", "").split("/", 1)
    if len(parts) != 2:
        return None
    host, path = parts
    path = path.split("?", 1)[0]
    if settings.aws_bucket_name in host and path.split("/", 1)[0] in STORAGE_FOLDERS:
        return path
    return None


def delete_image(url: str) -> bool:
    """Delete the object behind a bucket URL. Returns False on foreign URL or error."""
    key = parse_s3_key_from_url(url)
    if not key:
        logger.warning("S3 delete skipped, not a bucket url url=%s", url[:120])
        return False
    try:
        s3 = _get_s3_client()
        s3.delete_object(Bucket=settings.aws_bucket_name, Key=key)
        logger.info("S3 delete success bucket=%s key=%s", settings.aws_bucket_name, key)
        return True
    except ClientError as e:
        logger.warning("S3 delete failed key=%s error=%s", key, e)
        return False
