"""
Admin photo gallery endpoints - S3 upload/list/delete under profile/ and projects/.
"""
from typing import Literal

from fastapi import APIRouter, Depends, File, HTTPException, UploadFile, status

from portfolio.app.core.dependencies import get_current_admin
from portfolio.app.core.logging_config import get_logger
from portfolio.app.services.storage_service import delete_image, list_images, upload_image

logger = get_logger("api.admin.photos")
router = APIRouter(dependencies=[Depends(get_current_admin)])

Folder = Literal["profile", "projects"]


@router.get("/{folder}")
def get_photos(folder: Folder) -> list[str]:
    try:
        return list_images(folder)
    except (ValueError, RuntimeError) as e:
        raise HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail=str(e))


@router.post("/{folder}", status_code=status.HTTP_201_CREATED)
async def upload_photo(folder: Folder, file: UploadFile = File(...)) -> dict:
    if not file.filename:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="File name is required")
    content = await file.read()
    if not content:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="File is empty")
    try:
        return upload_image(
            content,
            file.filename,
            folder,
            mime_type=file.content_type or "application/octet-stream",
        )
    except (ValueError, RuntimeError) as e:
        logger.error("Photo upload failed folder=%s file=%s error=%s", folder, file.filename, e)
        raise HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail=str(e))


@router.delete("")
def remove_photo(url: str) -> dict:
    try:
        deleted = delete_image(url)
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail=str(e))
    if not deleted:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Photo could not be deleted")
    return {"ok": True}
