"""
services/pdf_renderer.py

HTML → PDF 변환
- chromium: 요청마다 Playwright 로 headless Chromium 을 띄우고, 성공/실패와 무관하게 닫는다.
- weasyprint: 프로세스 내 렌더링 (브라우저 없이 배포할 때)
- A4, 배경 인쇄, 여백 0 (여백은 HTML/CSS 의 .page padding 으로 처리)
"""

import logging

from playwright.async_api import async_playwright
from starlette.concurrency import run_in_threadpool

from config.settings import settings

logger = logging.getLogger(__name__)

ZERO_MARGIN = {"top": "0", "right": "0", "bottom": "0", "left": "0"}
CHROMIUM_ARGS = ["--no-sandbox", "--disable-setuid-sandbox"]


class PDFRenderError(Exception):
    """엔진 실행/페이지 로딩/렌더링 실패를 하나로 묶은 예외"""
    pass


class PDFRenderer:
    def __init__(self, engine: str = "chromium", executable_path=None, timeout_ms: int = 30000):
        self.engine = engine
        self.executable_path = executable_path
        self.timeout_ms = timeout_ms

    async def render(self, html: str) -> bytes:
        try:
            if self.engine == "weasyprint":
                return await run_in_threadpool(self._render_weasyprint, html)
            return await self._render_chromium(html)
        except Exception as e:
            logger.exception("PDF render failed (engine=%s)", self.engine)
            raise PDFRenderError(f"PDF render failed: {e}") from e

    async def _render_chromium(self, html: str) -> bytes:
        async with async_playwright() as p:
            browser = await p.chromium.launch(
                headless=True,
                args=CHROMIUM_ARGS,
                executable_path=self.executable_path or None,
            )
            try:
                page = await browser.new_page()
                await page.set_content(html, wait_until="networkidle", timeout=self.timeout_ms)
                return await page.pdf(
                    format="A4",
                    print_background=True,
                    margin=ZERO_MARGIN,
                )
            finally:
                await browser.close()

    @staticmethod
    def _render_weasyprint(html: str) -> bytes:
        # pango 등 시스템 라이브러리가 필요하므로 이 엔진을 쓸 때만 로드
        import weasyprint

        return weasyprint.HTML(string=html).write_pdf()


pdf_renderer = PDFRenderer(
    engine=settings.PDF_ENGINE,
    executable_path=settings.CHROMIUM_EXECUTABLE_PATH,
    timeout_ms=settings.PDF_RENDER_TIMEOUT_MS,
)
