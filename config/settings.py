"""
config/settings.py

- .env에 정의한 환경변수를 읽어 애플리케이션 전역 설정으로 제공합니다.
- pydantic v2 / pydantic-settings v2 사용.
- 모든 값에 기본값이 있으므로 자격 증명이 없으면 Mock(fixture) 모드로 기동합니다.
"""

from typing import Annotated, List, Optional, Literal
from pydantic import field_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict


class Settings(BaseSettings):
    # =========================
    # 앱/런타임
    # =========================
    ENV: Literal["dev", "stage", "prod"] = "dev"
    APP_TITLE: str = "Homeroom Report API"
    APP_DESCRIPTION: str = "ระบบบันทึกกิจกรรมโฮมรูม - 담임 홈룸 활동 기록/보고서 API"
    APP_VERSION: str = "1.0.0"

    # =========================
    # CORS
    # =========================
    # 콤마(,)로 구분된 문자열 → List[str] 로 파싱
    CORS_ORIGINS: Annotated[List[str], NoDecode] = ["http://localhost:3000"]

    @field_validator("CORS_ORIGINS", mode="before")
    @classmethod
    def _split_origins(cls, v):
        if isinstance(v, str):
            # "a,b , c" → ["a","b","c"]
            return [s.strip() for s in v.split(",") if s.strip()]
        return v

    # =========================
    # Google Sheets (기록 저장소)
    # =========================
    GOOGLE_SHEET_ID: str = ""
    GOOGLE_SERVICE_ACCOUNT_EMAIL: str = ""
    GOOGLE_PRIVATE_KEY: str = ""

    @field_validator("GOOGLE_PRIVATE_KEY", mode="before")
    @classmethod
    def _unescape_private_key(cls, v):
        # .env 한 줄에 넣은 "\n" 리터럴을 실제 개행으로 복원
        if isinstance(v, str) and "\\n" in v:
            return v.replace("\\n", "\n")
        return v

    # =========================
    # 파일 업로드 (Apps Script → Google Drive)
    # =========================
    GOOGLE_APPS_SCRIPT_URL: str = ""
    UPLOAD_TIMEOUT: int = 30
    MAX_UPLOAD_MB: int = 20

    # =========================
    # PDF 렌더링
    # =========================
    PDF_ENGINE: Literal["chromium", "weasyprint"] = "chromium"
    CHROMIUM_EXECUTABLE_PATH: Optional[str] = None
    PDF_RENDER_TIMEOUT_MS: int = 30000

    # 폰트: PDF_FONT_DIR에 파일이 있으면 우선 사용, 없으면 URL에서 받아옴
    PDF_FONT_DIR: Optional[str] = None
    FONT_REGULAR_URL: str = "https://github.com/google/fonts/raw/main/ofl/sarabun/Sarabun-Regular.ttf"
    FONT_BOLD_URL: str = "https://github.com/google/fonts/raw/main/ofl/sarabun/Sarabun-Bold.ttf"
    FONT_FETCH_TIMEOUT: float = 5.0
    LOGO_PATH: Optional[str] = None

    # =========================
    # 기관 정보 (표지/표 머리글)
    # =========================
    INSTITUTION_NAME: str = "วิทยาลัยอาชีวศึกษาสุโขทัย"
    INSTITUTION_FOOTER: Annotated[List[str], NoDecode] = [
        "วิทยาลัยอาชีวศึกษาสุโขทัย สถาบันการอาชีวศึกษาภาคเหนือ 3",
        "สำนักงานอาชีวศึกษาจังหวัดสุโขทัย",
        "สำนักงานคณะกรรมการการอาชีวศึกษา กระทรวงศึกษาธิการ",
    ]

    @field_validator("INSTITUTION_FOOTER", mode="before")
    @classmethod
    def _split_footer(cls, v):
        if isinstance(v, str):
            return [s.strip() for s in v.split("|") if s.strip()]
        return v

    # =========================
    # Logging / Misc
    # =========================
    LOG_LEVEL: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"

    # =========================
    # BaseSettings Config
    # =========================
    model_config = SettingsConfigDict(
        env_file=".env",               # .env에서 값 로드
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",                # 정의되지 않은 키는 무시
    )


# ✅ settings 객체를 통해 어디서든 접근 가능
settings = Settings()
