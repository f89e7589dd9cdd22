from typing import Optional

from fastapi import APIRouter, Depends, Query

from dependencies.services import get_report_service
from schemas.reports import ReportCreate
from services.report_service import ReportService, summary_totals

router = APIRouter(prefix="/reports", tags=["รายงานโฮมรูม (홈룸 보고서)"])


# ==========================================================
# [1단계] 저장
# ==========================================================

# ✅ [CREATE] 보고서 저장 (공동 담임이면 이름 병합 후 저장)
@router.post("/")
def create_report(report: ReportCreate, service: ReportService = Depends(get_report_service)):
    report_id = service.save_report(report)
    return {
        "success": True,
        "data": {"id": report_id},
        "message": "บันทึกข้อมูลเรียบร้อยแล้ว",
    }


# ==========================================================
# [2단계] 조회
# ==========================================================

# ✅ [READ] 전체 보고서 (학기/학년도 지정 시 필터, 최신 날짜 순)
@router.get("/")
def read_reports(
    term: Optional[str] = Query(None, description="학기 (1/2/3)"),
    academic_year: Optional[str] = Query(None, description="학년도 (B.E.)"),
    service: ReportService = Depends(get_report_service),
):
    if term and academic_year:
        reports = service.summary(term, academic_year)
    else:
        reports = service.all_reports()

    return {
        "success": True,
        "data": [r.model_dump(by_alias=True) for r in reports],
        "totals": summary_totals(reports),
    }


# ✅ [HISTORY] 담임 한 명의 학기 이력 (주차 순) + 사진 목록
@router.get("/history")
def read_advisor_history(
    term: str = Query(..., description="학기"),
    academic_year: str = Query(..., description="학년도 (B.E.)"),
    advisor_name: str = Query(..., description="담임 이름 (공동 담임 보고서도 포함)"),
    service: ReportService = Depends(get_report_service),
):
    history = service.advisor_history(term, academic_year, advisor_name)
    return {
        "success": True,
        "data": history.model_dump(by_alias=True),
    }
