from typing import Optional

from schemas.common import CamelModel


# ✅ 입력용 스키마: 담임(ครูที่ปรึกษา) 추가/수정 시 사용 (POST/PUT 요청)
class AdvisorCreate(CamelModel):
    name: str                                # 담임 이름 (예: ครูสมชาย ใจดี)
    department: str                          # 학과 (สาขาวิชา)
    class_level: str                         # 학년 (ระดับชั้น, 예: ปวช. 1)
    room: str                                # 반 (ห้อง, 예: 1/1)
    year: Optional[int] = None               # 학년도 (B.E., 예: 2568)


# ✅ 출력용 스키마: 시트에서 읽어 온 담임 정보
class Advisor(CamelModel):
    id: str                                  # name-classLevel-room 에서 파생된 ID
    name: str
    year: int = 0
    department: str = ""
    class_level: str = ""
    room: str = ""
