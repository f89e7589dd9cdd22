"""
services/report_service.py

보고서 집계 계층
- 학기/학년도/담임 이름으로 보고서 필터링 및 정렬
- 사진 URL 목록 추출
- 공동 담임 이름 병합 (저장 시점에 적용)
- PDF 요청 데이터 구성
"""

import logging
from typing import Iterable, List, Optional, Sequence

from schemas.advisors import Advisor
from schemas.pdf import PdfData, PdfMode, PdfRequest, advisor_for_pdf
from schemas.reports import HomeroomReport, ReportCreate, ReportHistory, ReportOrder
from services.sheet_store import SheetRecordStore
from utils.drive_urls import to_direct_image_url

logger = logging.getLogger(__name__)

CO_ADVISOR_JOINER = " และ "


class AdvisorNotFoundError(LookupError):
    pass


# ==========================================================
# [1단계] 순수 집계 함수
# ==========================================================
def advisor_name_matches(report_advisor_name: str, advisor_name: Optional[str]) -> bool:
    """
    보고서와 담임은 이름으로만 연결된다(soft join).
    공동 담임 보고서("A และ B")도 잡히도록 부분 문자열 포함으로 판단한다.
    """
    if advisor_name is None:
        return True
    return advisor_name.strip() in (report_advisor_name or "")


def filter_reports(
    reports: Iterable[HomeroomReport],
    term: str,
    academic_year: str,
    advisor_name: Optional[str] = None,
    order: ReportOrder = "week",
) -> List[HomeroomReport]:
    """학기/학년도가 비어 있는 과거 행은 어느 학기에나 포함된다"""
    matched = [
        r for r in reports
        if (r.academic_year == academic_year or not r.academic_year)
        and (r.term == term or not r.term)
        and advisor_name_matches(r.advisor_name, advisor_name)
    ]
    if order == "date_desc":
        return sorted(matched, key=lambda r: r.date, reverse=True)
    return sorted(matched, key=lambda r: r.week)


def extract_photos(reports: Iterable[HomeroomReport]) -> List[str]:
    photos = []
    for r in reports:
        if not r.photo_url:
            continue
        photos.extend(url.strip() for url in r.photo_url.split(",") if url.strip())
    return photos


def merge_co_advisor_names(advisors: Sequence[Advisor], report: ReportCreate) -> str:
    """같은 (학년, 반, 학과)를 맡은 담임이 둘 이상이면 이름을 ' และ '로 합친다"""
    names = []
    for a in advisors:
        if (a.class_level, a.room, a.department) != (report.class_level, report.room, report.department):
            continue
        if a.name not in names:
            names.append(a.name)

    if len(names) > 1:
        return CO_ADVISOR_JOINER.join(names)
    return report.advisor_name


def summary_totals(reports: Sequence[HomeroomReport]) -> dict:
    return {
        "count": len(reports),
        "total_students": sum(r.total_students for r in reports),
        "present_students": sum(r.present_students for r in reports),
        "absent_students": sum(r.absent_students for r in reports),
    }


# ==========================================================
# [2단계] 저장소 연동 서비스
# ==========================================================
class ReportService:
    def __init__(self, store: SheetRecordStore):
        self.store = store

    def save_report(self, report: ReportCreate) -> str:
        year = int(report.academic_year) if report.academic_year.isdigit() else None
        advisors = self.store.get_advisors(year)

        merged_name = merge_co_advisor_names(advisors, report)
        if merged_name != report.advisor_name:
            logger.info("Co-advisor merge: %s -> %s", report.advisor_name, merged_name)
            report = report.model_copy(update={"advisor_name": merged_name})

        return self.store.save_report(report)

    def advisor_history(self, term: str, academic_year: str, advisor_name: str) -> ReportHistory:
        reports = filter_reports(self.store.get_reports(), term, academic_year, advisor_name, order="week")
        return ReportHistory(reports=reports, photos=extract_photos(reports))

    def all_reports(self) -> List[HomeroomReport]:
        return sorted(self.store.get_reports(), key=lambda r: r.date, reverse=True)

    def summary(self, term: str, academic_year: str) -> List[HomeroomReport]:
        return filter_reports(self.store.get_reports(), term, academic_year, None, order="date_desc")

    def find_advisor(self, advisor_id: str, year: Optional[int] = None) -> Advisor:
        for advisor in self.store.get_advisors(year):
            if advisor.id == advisor_id:
                return advisor
        raise AdvisorNotFoundError(advisor_id)

    def collect_pdf_request(
        self,
        mode: PdfMode,
        term: str,
        academic_year: str,
        advisor_id: Optional[str] = None,
        photos_per_page: int = 4,
    ) -> PdfRequest:
        """저장된 보고서로 PDF 요청 본문을 만든다 (summary 는 담임 필터 없음)"""
        if mode == "summary":
            return PdfRequest(
                mode=mode,
                data=PdfData(
                    term=term,
                    academic_year=academic_year,
                    reports=self.summary(term, academic_year),
                    photos_per_page=photos_per_page,
                ),
            )

        year = int(academic_year) if academic_year.isdigit() else None
        advisor = self.find_advisor(advisor_id, year)
        history = self.advisor_history(term, academic_year, advisor.name)

        return PdfRequest(
            mode=mode,
            data=PdfData(
                term=term,
                academic_year=academic_year,
                advisor=advisor_for_pdf(advisor),
                reports=history.reports,
                photos=[to_direct_image_url(p) for p in history.photos],
                photos_per_page=photos_per_page,
            ),
        )
