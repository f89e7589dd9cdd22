from fastapi import Depends

from services.drive_upload import DriveUploadClient, drive_client
from services.pdf_renderer import PDFRenderer, pdf_renderer
from services.pdf_service import PDFService, pdf_service
from services.report_service import ReportService
from services.sheet_store import SheetRecordStore, sheet_store


# ✅ 저장소 의존성: 요청마다 connect() 호출 (이미 연결됐으면 no-op)
def get_record_store() -> SheetRecordStore:
    sheet_store.connect()
    return sheet_store


def get_report_service(store: SheetRecordStore = Depends(get_record_store)) -> ReportService:
    return ReportService(store)


def get_drive_client() -> DriveUploadClient:
    return drive_client


def get_pdf_service() -> PDFService:
    return pdf_service


def get_pdf_renderer() -> PDFRenderer:
    return pdf_renderer
