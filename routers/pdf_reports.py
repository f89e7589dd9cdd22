import logging
from urllib.parse import quote

from fastapi import APIRouter, Depends
from fastapi.responses import Response, JSONResponse
from starlette.concurrency import run_in_threadpool

from dependencies.services import get_pdf_renderer, get_pdf_service, get_report_service
from schemas.common import error_body
from schemas.pdf import AdvisorPdfRequest, PdfRequest
from services.pdf_renderer import PDFRenderer, PDFRenderError
from services.pdf_service import PDFService
from services.report_service import AdvisorNotFoundError, ReportService

router = APIRouter(prefix="/pdf", tags=["PDF 생성"])
logger = logging.getLogger(__name__)


def _filename(request: PdfRequest) -> str:
    if request.data.advisor is not None:
        return f"homeroom-{request.mode}-{request.data.advisor.name}.pdf"
    return f"homeroom-{request.mode}.pdf"


def _pdf_response(content: bytes, filename: str) -> Response:
    # 태국어 파일명은 latin-1 헤더에 넣을 수 없으므로 filename* (RFC 5987) 로 전달
    return Response(
        content=content,
        media_type="application/pdf",
        headers={
            "Content-Disposition": f"attachment; filename=homeroom-report.pdf; filename*=UTF-8''{quote(filename)}"
        },
    )


async def _generate(request: PdfRequest, pdf_service: PDFService, renderer: PDFRenderer):
    """조립 → 렌더 → 응답. 실패 시 부분 결과 없이 JSON 에러"""
    if request.mode == "photos" and not request.data.photos:
        return JSONResponse(status_code=404, content=error_body(404, "ไม่พบรูปภาพ"))

    try:
        html = await pdf_service.build_document(request)
        pdf_content = await renderer.render(html)
    except PDFRenderError as e:
        return JSONResponse(status_code=500, content=error_body(500, f"Failed to generate PDF: {e}"))

    logger.info("PDF generated: mode=%s, reports=%d, photos=%d, bytes=%d",
                request.mode, len(request.data.reports), len(request.data.photos), len(pdf_content))
    return _pdf_response(pdf_content, _filename(request))


# ✅ [PDF] 클라이언트가 보낸 데이터로 보고서 생성
@router.post("")
async def generate_pdf(
    request: PdfRequest,
    pdf_service: PDFService = Depends(get_pdf_service),
    renderer: PDFRenderer = Depends(get_pdf_renderer),
):
    return await _generate(request, pdf_service, renderer)


# ✅ [PDF] 저장된 보고서로 서버에서 데이터를 모아 생성
@router.post("/advisor")
async def generate_advisor_pdf(
    body: AdvisorPdfRequest,
    service: ReportService = Depends(get_report_service),
    pdf_service: PDFService = Depends(get_pdf_service),
    renderer: PDFRenderer = Depends(get_pdf_renderer),
):
    try:
        request = await run_in_threadpool(
            service.collect_pdf_request,
            body.mode, body.term, body.academic_year, body.advisor_id, body.photos_per_page,
        )
    except AdvisorNotFoundError:
        return JSONResponse(status_code=404, content=error_body(404, "ไม่พบข้อมูลครูที่ปรึกษา"))

    return await _generate(request, pdf_service, renderer)
