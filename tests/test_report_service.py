import pytest

from schemas.advisors import Advisor, AdvisorCreate
from schemas.reports import HomeroomReport, ReportCreate
from services.report_service import (
    AdvisorNotFoundError,
    ReportService,
    extract_photos,
    filter_reports,
    merge_co_advisor_names,
    summary_totals,
)


def _report(**kwargs) -> HomeroomReport:
    base = {
        "term": "1",
        "academic_year": "2568",
        "week": 1,
        "date": "2025-06-01",
        "advisor_name": "ครูสมชาย ใจดี",
        "class_level": "ปวช. 1",
        "room": "1/1",
        "department": "เทคโนโลยีสารสนเทศ",
        "topic": "ปฐมนิเทศ",
    }
    base.update(kwargs)
    return HomeroomReport(**base)


REPORTS = [
    _report(id="a", week=3, date="2025-06-15"),
    _report(id="b", week=1, date="2025-06-01"),
    _report(id="c", week=2, date="2025-06-08", term="2"),
    _report(id="d", week=5, date="2025-07-01", academic_year="2567"),
    _report(id="e", week=4, date="2025-06-22", term="", academic_year=""),
    _report(id="f", week=2, date="2025-06-09", advisor_name="ครูนิภา รักเรียน"),
    _report(id="g", week=6, date="2025-07-10", advisor_name="ครูนิภา รักเรียน และ ครูสมชาย ใจดี"),
]


# ==========================================================
# 필터/정렬
# ==========================================================
def test_filter_keeps_only_matching_or_blank_term_and_year():
    result = filter_reports(REPORTS, "1", "2568")
    for r in result:
        assert r.term in ("1", "")
        assert r.academic_year in ("2568", "")
    assert {r.id for r in result} == {"a", "b", "e", "f", "g"}


def test_filter_by_advisor_name_includes_co_advisor_reports():
    result = filter_reports(REPORTS, "1", "2568", advisor_name="ครูสมชาย ใจดี")
    assert [r.id for r in result] == ["b", "a", "e", "g"]


def test_filter_sorts_by_week_ascending():
    weeks = [r.week for r in filter_reports(REPORTS, "1", "2568")]
    assert weeks == sorted(weeks)


def test_filter_sorts_by_date_descending_for_summary():
    dates = [r.date for r in filter_reports(REPORTS, "1", "2568", order="date_desc")]
    assert dates == sorted(dates, reverse=True)


def test_extract_photos_splits_and_skips_blanks():
    reports = [
        _report(photo_url="https://x/1.jpg, https://x/2.jpg"),
        _report(photo_url=None),
        _report(photo_url=""),
        _report(photo_url="https://x/3.jpg,,"),
    ]
    assert extract_photos(reports) == ["https://x/1.jpg", "https://x/2.jpg", "https://x/3.jpg"]


def test_summary_totals():
    reports = [
        _report(total_students=30, present_students=28, absent_students=2),
        _report(total_students=20, present_students=20, absent_students=0),
    ]
    assert summary_totals(reports) == {
        "count": 2,
        "total_students": 50,
        "present_students": 48,
        "absent_students": 2,
    }


# ==========================================================
# 공동 담임 병합
# ==========================================================
def test_co_advisor_names_are_joined():
    advisors = [
        Advisor(id="1", name="A", class_level="ปวช.1", room="1/1", department="X"),
        Advisor(id="2", name="B", class_level="ปวช.1", room="1/1", department="X"),
        Advisor(id="3", name="C", class_level="ปวช.1", room="1/2", department="X"),
    ]
    report = ReportCreate(term="1", academic_year="2568", advisor_name="A",
                          class_level="ปวช.1", room="1/1", department="X")
    assert merge_co_advisor_names(advisors, report) == "A และ B"


def test_single_advisor_keeps_submitted_name():
    advisors = [Advisor(id="1", name="A", class_level="ปวช.1", room="1/1", department="X")]
    report = ReportCreate(term="1", academic_year="2568", advisor_name="A",
                          class_level="ปวช.1", room="1/1", department="X")
    assert merge_co_advisor_names(advisors, report) == "A"


def test_duplicate_advisor_rows_are_not_repeated():
    advisors = [
        Advisor(id="1", name="A", class_level="ปวช.1", room="1/1", department="X"),
        Advisor(id="1b", name="A", class_level="ปวช.1", room="1/1", department="X"),
    ]
    report = ReportCreate(term="1", academic_year="2568", advisor_name="A",
                          class_level="ปวช.1", room="1/1", department="X")
    assert merge_co_advisor_names(advisors, report) == "A"


# ==========================================================
# 저장소 연동
# ==========================================================
def test_save_report_merges_names_before_storing(store):
    store.add_advisor(AdvisorCreate(name="ครูใหม่", department="เทคโนโลยีสารสนเทศ",
                                    class_level="ปวช. 1", room="1/1", year=2568))
    service = ReportService(store)

    report_id = service.save_report(ReportCreate(
        term="1", academic_year="2568", week=1, date="2025-06-01",
        advisor_name="ครูใหม่", department="เทคโนโลยีสารสนเทศ",
        class_level="ปวช. 1", room="1/1", topic="t",
    ))

    saved = store.get_reports()
    assert len(saved) == 1
    assert saved[0].id == report_id
    assert saved[0].advisor_name == "ครูสมชาย ใจดี และ ครูใหม่"
    assert saved[0].timestamp


def test_advisor_history_returns_reports_and_photos(store):
    service = ReportService(store)
    for week in (2, 1):
        store.save_report(ReportCreate(
            term="1", academic_year="2568", week=week, date=f"2025-06-0{week}",
            advisor_name="ครูนิภา รักเรียน", photo_url=f"https://x/{week}.jpg",
        ))

    history = service.advisor_history("1", "2568", "ครูนิภา รักเรียน")
    assert [r.week for r in history.reports] == [1, 2]
    assert history.photos == ["https://x/1.jpg", "https://x/2.jpg"]


def test_find_advisor_raises_for_unknown_id(store):
    with pytest.raises(AdvisorNotFoundError):
        ReportService(store).find_advisor("nobody")


def test_collect_pdf_request_for_advisor_normalizes_photos(store):
    service = ReportService(store)
    store.save_report(ReportCreate(
        term="1", academic_year="2568", week=1, date="2025-06-01",
        advisor_name="ครูนิภา รักเรียน",
        photo_url="https://drive.google.com/uc?export=view&id=PHOTO1",
    ))

    request = service.collect_pdf_request("all", "1", "2568", advisor_id="2")
    assert request.data.advisor.name == "ครูนิภา รักเรียน"
    assert len(request.data.reports) == 1
    assert request.data.photos == ["https://lh3.googleusercontent.com/d/PHOTO1"]


def test_collect_pdf_request_for_summary_has_no_advisor(store):
    service = ReportService(store)
    store.save_report(ReportCreate(term="1", academic_year="2568", date="2025-06-01", advisor_name="A"))
    store.save_report(ReportCreate(term="1", academic_year="2568", date="2025-06-08", advisor_name="B"))

    request = service.collect_pdf_request("summary", "1", "2568")
    assert request.data.advisor is None
    assert [r.advisor_name for r in request.data.reports] == ["B", "A"]
