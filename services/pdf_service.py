import asyncio
import base64
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence

import httpx
from jinja2 import Environment, FileSystemLoader, select_autoescape

from config.settings import settings
from schemas.pdf import PdfRequest
from services.report_service import summary_totals
from utils.drive_urls import to_direct_image_url

logger = logging.getLogger(__name__)

TEMPLATE_DIR = Path(__file__).resolve().parent.parent / "templates"

FONT_FILES = {
    "regular": "Sarabun-Regular.ttf",
    "bold": "Sarabun-Bold.ttf",
}


@dataclass
class EmbeddedAssets:
    """문서에 인라인으로 넣을 정적 자원 (base64). 없으면 None"""
    font_regular: Optional[str] = None
    font_bold: Optional[str] = None
    logo: Optional[str] = None


def paginate_photos(photos: Sequence[str], per_page: int) -> List[List[str]]:
    """사진을 페이지 단위(4장 또는 6장)로 자른다"""
    return [list(photos[i:i + per_page]) for i in range(0, len(photos), per_page)]


class PDFService:
    """
    보고서 요청 → 인쇄용 HTML 문서 조립
    - 레이아웃: cover / table / photos / summary / all
    - 폰트·로고는 base64 로 문서에 포함 (렌더 시 외부 네트워크 불필요)
    """

    def __init__(self, app_settings=settings):
        self.settings = app_settings
        self.env = Environment(
            loader=FileSystemLoader(TEMPLATE_DIR),
            autoescape=select_autoescape(["html"]),
        )

    def _render_template(self, template_name: str, data: Dict[str, Any]) -> str:
        """템플릿을 렌더링하여 HTML 생성"""
        template = self.env.get_template(template_name)
        return template.render(**data)

    # ==========================================================
    # [정적 자원] 폰트/로고 로딩 (실패해도 문서는 시스템 폰트로 생성)
    # ==========================================================
    async def _load_font(self, client: httpx.AsyncClient, weight: str, url: str) -> Optional[str]:
        if self.settings.PDF_FONT_DIR:
            local = Path(self.settings.PDF_FONT_DIR) / FONT_FILES[weight]
            if local.is_file():
                return base64.b64encode(local.read_bytes()).decode("ascii")

        try:
            # 다운로드 전체 시간을 FONT_FETCH_TIMEOUT 으로 제한
            response = await asyncio.wait_for(client.get(url), timeout=self.settings.FONT_FETCH_TIMEOUT)
            response.raise_for_status()
            return base64.b64encode(response.content).decode("ascii")
        except (httpx.HTTPError, asyncio.TimeoutError) as e:
            logger.warning("Font fetch failed (%s), falling back to system font: %s", weight, e)
            return None

    def _load_logo(self) -> Optional[str]:
        if not self.settings.LOGO_PATH:
            return None
        path = Path(self.settings.LOGO_PATH)
        try:
            return base64.b64encode(path.read_bytes()).decode("ascii")
        except OSError as e:
            logger.warning("Logo not embedded (%s): %s", path, e)
            return None

    async def load_assets(self) -> EmbeddedAssets:
        timeout = httpx.Timeout(self.settings.FONT_FETCH_TIMEOUT)
        async with httpx.AsyncClient(timeout=timeout, follow_redirects=True) as client:
            # 두 폰트를 동시에 받아 전체 대기 시간이 FONT_FETCH_TIMEOUT 한 번을 넘지 않게 한다
            regular, bold = await asyncio.gather(
                self._load_font(client, "regular", self.settings.FONT_REGULAR_URL),
                self._load_font(client, "bold", self.settings.FONT_BOLD_URL),
            )
        return EmbeddedAssets(font_regular=regular, font_bold=bold, logo=self._load_logo())

    # ==========================================================
    # [문서 조립]
    # ==========================================================
    def render_html(self, request: PdfRequest, assets: Optional[EmbeddedAssets] = None) -> str:
        data = request.data
        mode = request.mode
        photos = [to_direct_image_url(p) for p in data.photos]

        sections = []
        if mode == "summary":
            sections.append("summary")
        else:
            if mode in ("all", "cover"):
                sections.append("cover")
            if mode in ("all", "table"):
                sections.append("table")
            if mode in ("all", "photos") and photos:
                sections.append("photos")

        context = {
            "sections": sections,
            "term": data.term,
            "academic_year": data.academic_year,
            "advisor": data.advisor,
            "reports": data.reports,
            "totals": summary_totals(data.reports),
            "photo_pages": paginate_photos(photos, data.photos_per_page),
            "per_page": data.photos_per_page,
            "institution_name": self.settings.INSTITUTION_NAME,
            "institution_footer": self.settings.INSTITUTION_FOOTER,
            "assets": assets or EmbeddedAssets(),
        }
        return self._render_template("report.html", context)

    async def build_document(self, request: PdfRequest) -> str:
        assets = await self.load_assets()
        return self.render_html(request, assets)


pdf_service = PDFService()
