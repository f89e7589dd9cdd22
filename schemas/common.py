"""
schemas/common.py

- 프로젝트 전반에서 재사용할 공용 스키마 모음
- Pydantic v2 기준
- 포함 내용:
  1) camelCase 입출력 공통 베이스: CamelModel
  2) 에러 응답 표준: ErrorDetail, ErrorResponse
"""

from __future__ import annotations

from datetime import datetime, timezone

from pydantic import BaseModel, Field, ConfigDict
from pydantic.alias_generators import to_camel


# =========================================================
# 1) camelCase 베이스
# =========================================================

class CamelModel(BaseModel):
    """
    JSON은 camelCase(academicYear), 파이썬 속성은 snake_case(academic_year)
    - populate_by_name: 스크립트/테스트에서는 snake_case 키로도 생성 가능
    """
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="ignore")


# =========================================================
# 2) 에러 응답 표준
# =========================================================

class ErrorDetail(BaseModel):
    """에러 코드/메시지를 담는 최소 단위"""
    code: int = Field(..., description="HTTP 상태 코드와 동일한 에러 코드")
    message: str = Field(..., description="사람이 읽을 수 있는 에러 메시지")


class ErrorResponse(BaseModel):
    """
    전역 에러 핸들러에서 내려주는 표준 에러 응답
    - middlewares/error_handler.py 및 PDF 라우터에서 사용
    """
    success: bool = False
    error: ErrorDetail
    generated_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        description="응답 생성 시각 (UTC)"
    )

    model_config = ConfigDict(extra="ignore")


def error_body(code: int, message: str) -> dict:
    """JSONResponse content 용 dict (datetime은 ISO 문자열로 직렬화)"""
    return ErrorResponse(error=ErrorDetail(code=code, message=message)).model_dump(mode="json")

