import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from schemas.common import error_body
from services.pdf_renderer import PDFRenderError
from services.sheet_store import RecordStoreError

logger = logging.getLogger(__name__)


def add_error_handlers(app: FastAPI):
    @app.exception_handler(RecordStoreError)
    async def record_store_exception_handler(request: Request, exc: RecordStoreError):
        logger.error("Record store failure on %s: %s", request.url.path, exc)
        return JSONResponse(status_code=503, content=error_body(503, str(exc)))

    @app.exception_handler(PDFRenderError)
    async def pdf_render_exception_handler(request: Request, exc: PDFRenderError):
        return JSONResponse(status_code=500, content=error_body(500, str(exc)))

    @app.exception_handler(Exception)
    async def unhandled_exception_handler(request: Request, exc: Exception):
        logger.exception("Unhandled error on %s %s", request.method, request.url.path)
        return JSONResponse(status_code=500, content=error_body(500, str(exc)))
