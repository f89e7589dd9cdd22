"""
services/sheet_store.py

Google Sheets 를 DB처럼 쓰는 기록 저장소 어댑터.
- 탭 구성: Advisors(담임 목록), Reports(전체 보고서), "<학기>/<학년도>"(학기별 사본)
- 자격 증명이 없거나 연결에 실패하면 메모리 fixture 로 동작(Mock 모드)
- 읽기 실패는 로그 후 fixture 로 대체, 연결된 상태의 쓰기 실패는 RecordStoreError
"""

import copy
import logging
import re
import secrets
from datetime import datetime, timezone
from typing import Dict, List, Optional

import gspread
from gspread.exceptions import WorksheetNotFound
from gspread.utils import rowcol_to_a1

from config.settings import settings
from schemas.advisors import Advisor, AdvisorCreate
from schemas.reports import HomeroomReport, ReportCreate

logger = logging.getLogger(__name__)

SCOPES = ["https://www.googleapis.com/auth/spreadsheets"]
TOKEN_URI = "https://oauth2.googleapis.com/token"

ADVISOR_SHEET = "Advisors"
REPORT_SHEET = "Reports"

# 담임 탭은 태국어 머리글을 사용
ADVISOR_COLUMNS = {
    "name": "ครูที่ปรึกษา",
    "department": "สาขาวิชา",
    "class_level": "ระดับชั้น",
    "room": "ห้อง",
    "year": "ปีการศึกษา",
}
ADVISOR_HEADERS = list(ADVISOR_COLUMNS.values())

REPORT_HEADERS = [
    "id", "term", "academicYear", "week", "date",
    "advisorName", "department", "classLevel", "room",
    "topic", "totalStudents", "presentStudents",
    "absentStudents", "photoUrl", "timestamp",
]

# 방(1/1)/날짜 텍스트가 시트에서 날짜 서식으로 바뀌지 않도록 값을 그대로 기록
VALUE_INPUT = "RAW"

MOCK_ADVISORS: List[Dict] = [
    {"id": "1", "name": "ครูสมชาย ใจดี", "year": 2568, "department": "เทคโนโลยีสารสนเทศ", "class_level": "ปวช. 1", "room": "1/1"},
    {"id": "1-2", "name": "ครูสมชาย ใจดี", "year": 2568, "department": "เทคโนโลยีสารสนเทศ", "class_level": "ปวช. 3", "room": "1/3"},
    {"id": "2", "name": "ครูนิภา รักเรียน", "year": 2568, "department": "เทคโนโลยีสารสนเทศ", "class_level": "ปวช. 2", "room": "1/2"},
    {"id": "3", "name": "ครูวิชัย สอนเก่ง", "year": 2568, "department": "บัญชี", "class_level": "ปวช. 1", "room": "1/1"},
]


class RecordStoreError(Exception):
    """연결된 시트에 쓰기가 실패했을 때"""
    pass


def derive_advisor_id(name: str, class_level: str, room: str) -> str:
    """
    name-classLevel-room 을 이어 붙이고 공백을 '-'로 바꾼 ID.
    이름/학년/반이 서로 다른 사람 사이에서 겹치지 않을 때만 안정적이다.
    """
    return re.sub(r"\s+", "-", f"{name}-{class_level}-{room}")


def _new_report_id() -> str:
    return secrets.token_hex(4)


def _now_iso() -> str:
    return datetime.now(timezone.utc).isoformat().replace("+00:00", "Z")


class SheetRecordStore:
    def __init__(self, sheet_id: str = "", client_email: str = "", private_key: str = ""):
        self.sheet_id = sheet_id
        self.client_email = client_email
        self.private_key = private_key
        self.doc: Optional[gspread.Spreadsheet] = None
        self.is_connected = False

        # Mock 모드 저장소 (인스턴스마다 독립)
        self._mock_advisors: List[Dict] = copy.deepcopy(MOCK_ADVISORS)
        self._mock_reports: List[HomeroomReport] = []

    # ==========================================================
    # [연결]
    # ==========================================================
    def connect(self) -> None:
        """여러 번 호출해도 안전. 자격 증명이 없으면 Mock 모드로 남는다."""
        if self.is_connected:
            return

        if not (self.sheet_id and self.client_email and self.private_key):
            logger.warning("Google Sheets credentials not found. Using mock mode.")
            return

        try:
            client = gspread.service_account_from_dict(
                {
                    "type": "service_account",
                    "client_email": self.client_email,
                    "private_key": self.private_key,
                    "token_uri": TOKEN_URI,
                },
                scopes=SCOPES,
            )
            self.doc = client.open_by_key(self.sheet_id)
            self.is_connected = True
            logger.info("Connected to Google Sheet %s", self.sheet_id)
        except Exception:
            logger.exception("Failed to connect to Google Sheets; staying in mock mode")
            self.doc = None

    def _ensure_connected(self) -> None:
        if not self.is_connected:
            self.connect()

    def _worksheet(self, title: str, headers: Optional[List[str]] = None):
        """탭을 찾고, headers 가 주어지면 없을 때 머리글과 함께 생성"""
        try:
            return self.doc.worksheet(title)
        except WorksheetNotFound:
            if headers is None:
                return None
            sheet = self.doc.add_worksheet(title=title, rows=1000, cols=len(headers))
            sheet.append_row(headers, value_input_option=VALUE_INPUT)
            return sheet

    @staticmethod
    def _headers(sheet, default: List[str]) -> List[str]:
        """탭의 실제 머리글(1행). 비어 있으면 기본 머리글을 써 넣고 사용"""
        headers = sheet.row_values(1)
        if not any(str(h).strip() for h in headers):
            sheet.append_row(default, value_input_option=VALUE_INPUT)
            return list(default)
        return headers

    # ==========================================================
    # [담임] 조회/추가/수정/삭제
    # ==========================================================
    def get_advisors(self, year: Optional[int] = None) -> List[Advisor]:
        self._ensure_connected()

        if self.doc is None:
            return self._mock_advisor_list(year)

        try:
            sheet = self._worksheet(ADVISOR_SHEET)
            if sheet is None:
                logger.warning("Sheet '%s' not found. Using mock data.", ADVISOR_SHEET)
                return self._mock_advisor_list(year)

            advisors = [
                self._row_to_advisor(row, index, year)
                for index, row in enumerate(sheet.get_all_records())
            ]
            if year is not None:
                advisors = [a for a in advisors if a.year in (0, year)]
            return advisors
        except Exception:
            logger.exception("Error fetching advisors; using mock data")
            return self._mock_advisor_list(year)

    def add_advisor(self, data: AdvisorCreate) -> bool:
        self._ensure_connected()

        if self.doc is None:
            record = data.model_dump()
            record["id"] = derive_advisor_id(data.name, data.class_level, data.room)
            record["year"] = data.year or 0
            self._mock_advisors.append(record)
            return True

        try:
            sheet = self._worksheet(ADVISOR_SHEET, ADVISOR_HEADERS)
            headers = self._headers(sheet, ADVISOR_HEADERS)
            row = self._advisor_values(data)
            row["id"] = derive_advisor_id(data.name, data.class_level, data.room)
            sheet.append_row([row.get(h, "") for h in headers], value_input_option=VALUE_INPUT)
            return True
        except Exception:
            logger.exception("Error adding advisor %s", data.name)
            return False

    def update_advisor(self, old_id: str, data: AdvisorCreate) -> bool:
        self._ensure_connected()

        if self.doc is None:
            for record in self._mock_advisors:
                if record["id"] == old_id:
                    record.update(data.model_dump(exclude={"year"}))
                    if data.year:
                        record["year"] = data.year
                    record["id"] = derive_advisor_id(data.name, data.class_level, data.room)
                    return True
            return False

        try:
            sheet = self._worksheet(ADVISOR_SHEET)
            headers = self._headers(sheet, ADVISOR_HEADERS)
            records = sheet.get_all_records()
            index = self._find_advisor_index(records, old_id)
            if index is None:
                return False

            # id 열과 그 밖의 열은 기존 값을 유지하고 담임 열만 덮어씀
            row = dict(records[index])
            row.update(self._advisor_values(data))
            row_number = index + 2
            sheet.update(
                range_name=f"A{row_number}:{rowcol_to_a1(row_number, len(headers))}",
                values=[[row.get(h, "") for h in headers]],
                value_input_option=VALUE_INPUT,
            )
            return True
        except Exception:
            logger.exception("Error updating advisor %s", old_id)
            return False

    def delete_advisor(self, advisor_id: str) -> bool:
        self._ensure_connected()

        if self.doc is None:
            before = len(self._mock_advisors)
            self._mock_advisors = [a for a in self._mock_advisors if a["id"] != advisor_id]
            return len(self._mock_advisors) < before

        try:
            sheet = self._worksheet(ADVISOR_SHEET)
            index = self._find_advisor_index(sheet.get_all_records(), advisor_id)
            if index is None:
                return False
            sheet.delete_rows(index + 2)
            return True
        except Exception:
            logger.exception("Error deleting advisor %s", advisor_id)
            return False

    # ==========================================================
    # [보고서] 저장/조회
    # ==========================================================
    def save_report(self, report: ReportCreate) -> str:
        """id/timestamp 를 부여해 Reports 와 학기별 탭 양쪽에 기록하고 id 반환"""
        self._ensure_connected()

        new_report = HomeroomReport(
            **report.model_dump(),
            id=_new_report_id(),
            timestamp=_now_iso(),
        )

        if self.doc is None:
            logger.warning("Using mock data (not connected) for save")
            self._mock_reports.append(new_report)
            return new_report.id

        values = self._report_values(new_report)
        try:
            # 탭마다 머리글 순서가 다를 수 있으므로 머리글 이름으로 행을 만든다
            for title in (REPORT_SHEET, f"{new_report.term}/{new_report.academic_year}"):
                sheet = self._worksheet(title, REPORT_HEADERS)
                headers = self._headers(sheet, REPORT_HEADERS)
                sheet.append_row([values.get(h, "") for h in headers], value_input_option=VALUE_INPUT)
        except Exception as e:
            logger.exception("Error saving report")
            raise RecordStoreError(f"บันทึกรายงานไม่สำเร็จ: {e}") from e

        return new_report.id

    def get_reports(self) -> List[HomeroomReport]:
        self._ensure_connected()

        if self.doc is None:
            return list(self._mock_reports)

        try:
            sheet = self._worksheet(REPORT_SHEET)
            if sheet is None:
                return list(self._mock_reports)
            return [HomeroomReport.model_validate(row) for row in sheet.get_all_records()]
        except Exception:
            logger.exception("Error fetching reports; using mock data")
            return list(self._mock_reports)

    # ==========================================================
    # [내부] 행 변환
    # ==========================================================
    def _mock_advisor_list(self, year: Optional[int]) -> List[Advisor]:
        return [
            Advisor(**a) for a in self._mock_advisors
            if year is None or a["year"] in (0, year)
        ]

    @staticmethod
    def _row_to_advisor(row: Dict, index: int, year: Optional[int]) -> Advisor:
        name = str(row.get(ADVISOR_COLUMNS["name"], "")).strip()
        class_level = str(row.get(ADVISOR_COLUMNS["class_level"], "")).strip()
        room = str(row.get(ADVISOR_COLUMNS["room"], "")).strip()
        department = str(row.get(ADVISOR_COLUMNS["department"], "")).strip()
        raw_year = str(row.get(ADVISOR_COLUMNS["year"], "")).strip()

        advisor_id = str(row.get("id", "")).strip() or derive_advisor_id(name, class_level, room)
        if advisor_id == "--":
            advisor_id = f"generated-{index}"

        return Advisor(
            id=advisor_id,
            name=name,
            year=int(raw_year) if raw_year.isdigit() else (year or 0),
            department=department,
            class_level=class_level,
            room=room,
        )

    def _find_advisor_index(self, records: List[Dict], advisor_id: str) -> Optional[int]:
        # get_all_records 는 머리글을 제외하므로 시트 행 번호는 index + 2
        for index, row in enumerate(records):
            if self._row_to_advisor(row, index, None).id == advisor_id:
                return index
        return None

    @staticmethod
    def _advisor_values(data: AdvisorCreate) -> Dict:
        """머리글 이름 → 값 (열 순서는 각 탭의 머리글을 따름)"""
        return {
            ADVISOR_COLUMNS["name"]: data.name,
            ADVISOR_COLUMNS["department"]: data.department,
            ADVISOR_COLUMNS["class_level"]: data.class_level,
            ADVISOR_COLUMNS["room"]: data.room,
            ADVISOR_COLUMNS["year"]: data.year or "",
        }

    @staticmethod
    def _report_values(report: HomeroomReport) -> Dict:
        values = report.model_dump(by_alias=True)
        values["photoUrl"] = values.get("photoUrl") or ""
        return values


# ✅ 앱 전역에서 공유하는 저장소 인스턴스
sheet_store = SheetRecordStore(
    sheet_id=settings.GOOGLE_SHEET_ID,
    client_email=settings.GOOGLE_SERVICE_ACCOUNT_EMAIL,
    private_key=settings.GOOGLE_PRIVATE_KEY,
)
