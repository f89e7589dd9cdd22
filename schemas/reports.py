from typing import List, Literal, Optional

from pydantic import Field, field_validator

from schemas.common import CamelModel


def _to_int(value) -> int:
    """시트의 빈칸/문자열 숫자를 관대하게 정수로 변환 (실패 시 0)"""
    if value is None or isinstance(value, bool):
        return 0
    try:
        return int(float(str(value).strip()))
    except (ValueError, OverflowError):
        return 0


# ==========================================================
# [입력용 스키마]
# ==========================================================
class ReportCreate(CamelModel):
    term: str                               # 학기 (ภาคเรียนที่)
    academic_year: str                      # 학년도 (ปีการศึกษา, B.E.)
    week: int = 0                           # 주차
    date: str = ""                          # 활동 일자 (YYYY-MM-DD)
    advisor_name: str                       # 담임 이름 (공동 담임이면 저장 시 병합)
    department: str = ""
    class_level: str = ""
    room: str = ""
    topic: str = ""                         # 훈화/활동 주제
    total_students: int = 0
    present_students: int = 0
    absent_students: int = 0
    photo_url: Optional[str] = None         # 콤마로 연결된 사진 URL 목록

    @field_validator("week", "total_students", "present_students", "absent_students", mode="before")
    @classmethod
    def _lenient_int(cls, v):
        return _to_int(v)


# ==========================================================
# [출력용 스키마]
# ==========================================================
class HomeroomReport(ReportCreate):
    """
    저장된 보고서 한 행.
    과거 행은 값이 비어 있을 수 있으므로 모든 필드에 기본값을 둔다.
    PDF 요청 본문의 reports[] 항목도 이 스키마로 받는다.
    """
    id: str = ""
    term: str = ""
    academic_year: str = ""
    advisor_name: str = ""
    timestamp: str = ""

    @field_validator(
        "id", "term", "academic_year", "date", "advisor_name", "department",
        "class_level", "room", "topic", "timestamp",
        mode="before",
    )
    @classmethod
    def _lenient_str(cls, v):
        return "" if v is None else str(v).strip()


class ReportHistory(CamelModel):
    """단일 담임 이력 조회 결과 (주차 오름차순 + 사진 목록)"""
    reports: List[HomeroomReport] = Field(default_factory=list)
    photos: List[str] = Field(default_factory=list)


ReportOrder = Literal["week", "date_desc"]
