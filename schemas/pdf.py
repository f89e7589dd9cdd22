from typing import List, Literal, Optional

from pydantic import Field, model_validator

from schemas.advisors import Advisor
from schemas.common import CamelModel
from schemas.reports import HomeroomReport

PdfMode = Literal["cover", "table", "photos", "summary", "all"]

# 담임 정보가 있어야 그릴 수 있는 레이아웃
ADVISOR_MODES = ("cover", "table", "all")


class PdfAdvisor(CamelModel):
    """표지/표 머리글에 쓰는 담임 정보 (id는 선택)"""
    id: Optional[str] = None
    name: str
    department: str = ""
    class_level: str = ""
    room: str = ""


class PdfData(CamelModel):
    term: str
    academic_year: str = ""
    advisor: Optional[PdfAdvisor] = None
    reports: List[HomeroomReport] = Field(default_factory=list)
    photos: List[str] = Field(default_factory=list)        # URL 또는 data: URL
    photos_per_page: Literal[4, 6] = 4                     # 사진 페이지 레이아웃 (2x2 / 2x3)


class PdfRequest(CamelModel):
    mode: PdfMode
    data: PdfData

    @model_validator(mode="after")
    def _require_advisor(self):
        if self.mode in ADVISOR_MODES and self.data.advisor is None:
            raise ValueError(f"mode '{self.mode}' requires data.advisor")
        return self


class AdvisorPdfRequest(CamelModel):
    """저장된 데이터로 서버에서 직접 보고서를 구성하는 요청"""
    mode: PdfMode
    term: str
    academic_year: str
    advisor_id: Optional[str] = None
    photos_per_page: Literal[4, 6] = 4

    @model_validator(mode="after")
    def _require_advisor(self):
        # 사진도 담임 기준으로 모으므로 summary 외에는 모두 담임이 필요
        if self.mode != "summary" and not self.advisor_id:
            raise ValueError(f"mode '{self.mode}' requires advisorId")
        return self


def advisor_for_pdf(advisor: Advisor) -> PdfAdvisor:
    return PdfAdvisor(
        id=advisor.id,
        name=advisor.name,
        department=advisor.department,
        class_level=advisor.class_level,
        room=advisor.room,
    )
