"""
utils/drive_urls.py

Google Drive 공유 링크를 <img>에서 바로 그릴 수 있는 이미지 URL로 바꾼다.
순수 함수(I/O 없음)이며 두 번 적용해도 결과가 같다.
"""

import re

DIRECT_IMAGE_HOSTS = ("googleusercontent.com", "googleapis.com")
DIRECT_IMAGE_URL = "https://lh3.googleusercontent.com/d/{file_id}"

_QUERY_ID = re.compile(r"[?&]id=([^&#]+)")
_FILE_PATH_ID = re.compile(r"/file/d/([^/?#]+)")


def extract_file_id(url: str):
    """?id= / &id= 를 먼저 보고, 없으면 /file/d/<id>/ 경로에서 찾는다"""
    for pattern in (_QUERY_ID, _FILE_PATH_ID):
        match = pattern.search(url)
        if match:
            return match.group(1)
    return None


def to_direct_image_url(url: str) -> str:
    if not url or url.startswith("data:"):
        return url

    if any(host in url for host in DIRECT_IMAGE_HOSTS):
        return url

    file_id = extract_file_id(url)
    if file_id:
        return DIRECT_IMAGE_URL.format(file_id=file_id)
    return url


def convert_url_list(urls: str) -> str:
    """콤마로 연결된 URL 문자열을 항목별로 변환"""
    if not urls:
        return urls
    return ",".join(to_direct_image_url(u.strip()) for u in urls.split(","))
