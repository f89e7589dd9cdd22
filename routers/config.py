from datetime import date
from typing import Optional

from fastapi import APIRouter

router = APIRouter(prefix="/config", tags=["설정"])

BE_OFFSET = 543   # 불기(B.E.) = 서기 + 543

DEPARTMENTS = [
    "การบัญชี",
    "การตลาด",
    "โลจิสติกส์",
    "การจัดการสำนักงาน",
    "เทคโนโลยีธุรกิจดิจิทัล",
    "การท่องเที่ยว",
    "แฟชั่นและสิ่งทอ",
    "อาหารและโภชนาการ",
    "คหกรรมศาสตร์",
    "วิจิตรศิลป์",
    "ดิจิทัลกราฟิก",
    "การโรงแรม",
]

CLASS_LEVELS = ["ปวช. 1", "ปวช. 2", "ปวช. 3", "ปวส. 1", "ปวส. 2"]


# ==========================================================
# [1단계] 현재 학기 계산 함수
# ==========================================================
def get_current_term_year(today: Optional[date] = None):
    """
    태국 학사력 기준 (학년도는 불기, 5월 시작)
    - 5~10월  → 당해 학년도 1학기
    - 11~12월 → 당해 학년도 2학기
    - 1~3월   → 전년도 학년도 2학기
    - 4월     → 전년도 학년도 하계(3학기)
    """
    today = today or date.today()
    year, month = today.year + BE_OFFSET, today.month

    if 5 <= month <= 10:
        return year, "1"
    if month >= 11:
        return year, "2"
    if month <= 3:
        return year - 1, "2"
    return year - 1, "3"


# ==========================================================
# [2단계] Config 라우터
# ==========================================================

# ✅ [READ] 현재 학기 + 선택 목록 반환
@router.get("/academic")
def get_academic_config():
    """현재 학기(term), 학년도(academicYear) 및 폼 선택지 반환"""
    academic_year, term = get_current_term_year()
    current_be = date.today().year + BE_OFFSET
    return {
        "success": True,
        "data": {
            "term": term,
            "academicYear": str(academic_year),
            "years": [current_be + offset for offset in range(-1, 4)],
            "terms": ["1", "2", "3"],
            "departments": DEPARTMENTS,
            "classLevels": CLASS_LEVELS,
        },
        "message": f"ภาคเรียนที่ {term}/{academic_year}",
    }
