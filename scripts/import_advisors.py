"""
담임 목록 CSV → Google Sheets(Advisors 탭) 일괄 등록

실행: python -m scripts.import_advisors [CSV_PATH]
CSV 컬럼: name, department, classLevel, room[, year]
"""

import csv
import logging
import sys

from pydantic import ValidationError

from schemas.advisors import AdvisorCreate
from services.sheet_store import SheetRecordStore, sheet_store

logger = logging.getLogger(__name__)

CSV_PATH = "data/advisors.csv"  # ✅ 기본 파일 경로


def import_advisors(csv_path: str = CSV_PATH, store: SheetRecordStore = sheet_store) -> int:
    store.connect()
    added = 0

    with open(csv_path, newline="", encoding="utf-8-sig") as csvfile:
        reader = csv.DictReader(csvfile)
        for line_no, row in enumerate(reader, start=2):
            try:
                advisor = AdvisorCreate(
                    name=row["name"].strip(),                          # 담임 이름
                    department=row["department"].strip(),              # 학과
                    class_level=row["classLevel"].strip(),             # 학년
                    room=row["room"].strip(),                          # 반
                    year=int(row["year"]) if (row.get("year") or "").strip().isdigit() else None,
                )
            except (KeyError, AttributeError, ValidationError) as e:
                logger.warning("⚠️ %d행 건너뜀: %s", line_no, e)
                continue

            if store.add_advisor(advisor):
                added += 1
            else:
                logger.warning("⚠️ %d행 저장 실패: %s", line_no, advisor.name)

    logger.info("✅ 담임 %d명 등록 완료", added)
    return added


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    import_advisors(sys.argv[1] if len(sys.argv) > 1 else CSV_PATH)
