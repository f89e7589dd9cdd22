from typing import Optional

from fastapi import APIRouter, Depends, Query
from fastapi.responses import JSONResponse

from dependencies.services import get_record_store
from schemas.advisors import AdvisorCreate
from schemas.common import error_body
from services.sheet_store import SheetRecordStore

router = APIRouter(prefix="/advisors", tags=["ครูที่ปรึกษา (담임)"])


# ==========================================================
# [1단계] CRUD 라우터
# ==========================================================

# ✅ [READ] 담임 목록 조회 (학년도 필터 선택)
@router.get("/")
def read_advisors(
    year: Optional[int] = Query(None, description="학년도 (B.E., 예: 2568)"),
    store: SheetRecordStore = Depends(get_record_store),
):
    advisors = store.get_advisors(year)
    return {
        "success": True,
        "data": [a.model_dump(by_alias=True) for a in advisors],
        "message": f"{len(advisors)} advisors",
    }


# ✅ [CREATE] 담임 추가
@router.post("/")
def create_advisor(advisor: AdvisorCreate, store: SheetRecordStore = Depends(get_record_store)):
    if not store.add_advisor(advisor):
        return JSONResponse(status_code=503, content=error_body(503, "เพิ่มข้อมูลไม่สำเร็จ"))
    return {
        "success": True,
        "data": advisor.model_dump(by_alias=True),
        "message": "เพิ่มข้อมูลสำเร็จ",
    }


# ✅ [UPDATE] 담임 정보 수정 (ID 는 이름/학년/반에서 파생되므로 수정 후 바뀔 수 있음)
@router.put("/{advisor_id:path}")
def update_advisor(
    advisor_id: str,
    updated: AdvisorCreate,
    store: SheetRecordStore = Depends(get_record_store),
):
    if not store.update_advisor(advisor_id, updated):
        return JSONResponse(status_code=404, content=error_body(404, "ไม่พบข้อมูลครูที่ปรึกษา"))
    return {
        "success": True,
        "data": updated.model_dump(by_alias=True),
        "message": "แก้ไขข้อมูลสำเร็จ",
    }


# ✅ [DELETE] 담임 삭제
@router.delete("/{advisor_id:path}")
def delete_advisor(advisor_id: str, store: SheetRecordStore = Depends(get_record_store)):
    if not store.delete_advisor(advisor_id):
        return JSONResponse(status_code=404, content=error_body(404, "ลบข้อมูลไม่สำเร็จ"))
    return {
        "success": True,
        "data": {"advisor_id": advisor_id},
        "message": "ลบข้อมูลสำเร็จ",
    }
