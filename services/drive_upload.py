import base64
import logging
from typing import Iterable, List, Optional, Tuple

import requests

from config.settings import settings

logger = logging.getLogger(__name__)


class DriveUploadClient:
    """
    Google Apps Script 웹앱으로 파일을 보내 Drive 에 저장하고 공개 URL을 받는다.
    실패는 예외 대신 None 으로 돌려주므로 호출 측은 해당 파일만 건너뛰면 된다.
    """

    def __init__(self, endpoint: str = "", timeout: int = 30):
        self.endpoint = endpoint
        self.timeout = timeout

    def upload_file(self, content: bytes, file_name: str, mime_type: str = "application/octet-stream") -> Optional[str]:
        if not self.endpoint:
            logger.error("[Drive] GOOGLE_APPS_SCRIPT_URL is not configured")
            return None

        payload = {
            "file": base64.b64encode(content).decode("ascii"),
            "fileName": file_name,
            "mimeType": mime_type,
        }
        try:
            response = requests.post(self.endpoint, data=payload, timeout=self.timeout)
            if not response.ok:
                logger.error("[Drive] HTTP Error: %s %s", response.status_code, response.reason)
                return None

            result = response.json()
            if result.get("success") and result.get("url"):
                return result["url"]

            logger.error("[Drive] Upload failed: %s", result.get("error") or "Unknown error")
            return None
        except (requests.RequestException, ValueError) as e:
            # ValueError: 응답이 JSON 이 아닐 때
            logger.error("[Drive] Exception during upload of %s: %s", file_name, e)
            return None

    def upload_files(self, files: Iterable[Tuple[bytes, str, str]]) -> List[str]:
        """(content, file_name, mime_type) 목록을 순서대로 올리고 성공한 URL만 반환"""
        urls = []
        for content, file_name, mime_type in files:
            url = self.upload_file(content, file_name, mime_type)
            if url is None:
                logger.warning("[Drive] Skipping %s", file_name)
                continue
            urls.append(url)
        return urls


drive_client = DriveUploadClient(
    endpoint=settings.GOOGLE_APPS_SCRIPT_URL,
    timeout=settings.UPLOAD_TIMEOUT,
)
