import pytest

from services import pdf_renderer as renderer_module
from services.pdf_renderer import PDFRenderError, PDFRenderer

pytestmark = pytest.mark.anyio


class FakePage:
    def __init__(self, fail_on=None):
        self.fail_on = fail_on
        self.content = None
        self.pdf_options = None

    async def set_content(self, html, wait_until=None, timeout=None):
        if self.fail_on == "set_content":
            raise RuntimeError("page load timeout")
        self.content = html

    async def pdf(self, **options):
        if self.fail_on == "pdf":
            raise RuntimeError("print failed")
        self.pdf_options = options
        return b"%PDF-1.7 fake"


class FakeBrowser:
    def __init__(self, page):
        self.page = page
        self.closed = False

    async def new_page(self):
        return self.page

    async def close(self):
        self.closed = True


class FakeChromium:
    def __init__(self, browser, launch_error=None):
        self.browser = browser
        self.launch_error = launch_error

    async def launch(self, **kwargs):
        if self.launch_error:
            raise self.launch_error
        return self.browser


class FakePlaywright:
    def __init__(self, chromium):
        self.chromium = chromium

    async def __aenter__(self):
        return self

    async def __aexit__(self, *exc):
        return False


def _install(monkeypatch, fail_on=None, launch_error=None):
    page = FakePage(fail_on)
    browser = FakeBrowser(page)
    chromium = FakeChromium(browser, launch_error)
    monkeypatch.setattr(renderer_module, "async_playwright", lambda: FakePlaywright(chromium))
    return page, browser


async def test_renders_a4_zero_margin_and_closes_browser(monkeypatch):
    page, browser = _install(monkeypatch)

    pdf = await PDFRenderer().render("<html>ok</html>")

    assert pdf.startswith(b"%PDF")
    assert page.content == "<html>ok</html>"
    assert page.pdf_options["format"] == "A4"
    assert page.pdf_options["print_background"] is True
    assert set(page.pdf_options["margin"].values()) == {"0"}
    assert browser.closed


@pytest.mark.parametrize("fail_on", ["set_content", "pdf"])
async def test_failure_closes_browser_and_raises_single_error(monkeypatch, fail_on):
    page, browser = _install(monkeypatch, fail_on=fail_on)

    with pytest.raises(PDFRenderError):
        await PDFRenderer().render("<html></html>")
    assert browser.closed


async def test_launch_failure_is_wrapped(monkeypatch):
    _install(monkeypatch, launch_error=RuntimeError("chromium missing"))

    with pytest.raises(PDFRenderError, match="chromium missing"):
        await PDFRenderer().render("<html></html>")


async def test_weasyprint_failure_is_wrapped(monkeypatch):
    def broken(html):
        raise OSError("cannot load library 'pango'")

    monkeypatch.setattr(PDFRenderer, "_render_weasyprint", staticmethod(broken))

    with pytest.raises(PDFRenderError):
        await PDFRenderer(engine="weasyprint").render("<html></html>")
