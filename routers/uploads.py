import logging
from typing import List

from fastapi import APIRouter, Depends, File, UploadFile

from config.settings import settings
from dependencies.services import get_drive_client
from services.drive_upload import DriveUploadClient
from utils.drive_urls import convert_url_list

router = APIRouter(prefix="/uploads", tags=["อัปโหลดรูปภาพ (사진 업로드)"])
logger = logging.getLogger(__name__)


# ✅ [UPLOAD] 사진 여러 장 업로드 → 성공한 URL 만 순서대로 반환
@router.post("/")
def upload_photos(
    files: List[UploadFile] = File(..., description="활동 사진 (여러 장 가능)"),
    client: DriveUploadClient = Depends(get_drive_client),
):
    max_bytes = settings.MAX_UPLOAD_MB * 1024 * 1024
    batch = []
    for f in files:
        content = f.file.read()
        if len(content) > max_bytes:
            logger.warning("Skipping %s: %d bytes exceeds %d MB", f.filename, len(content), settings.MAX_UPLOAD_MB)
            continue
        batch.append((content, f.filename or "photo", f.content_type or "application/octet-stream"))

    urls = client.upload_files(batch)
    return {
        "success": True,
        "data": {
            "urls": urls,
            "photoUrl": convert_url_list(",".join(urls)),   # 보고서 저장 시 그대로 사용 (직접 이미지 URL)
            "failed": len(files) - len(urls),
        },
        "message": f"{len(urls)}/{len(files)} uploaded",
    }
