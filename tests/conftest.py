import pytest
from fastapi.testclient import TestClient

from dependencies.services import get_drive_client, get_pdf_renderer, get_pdf_service, get_record_store
from main import app
from services.pdf_service import EmbeddedAssets, PDFService
from services.sheet_store import SheetRecordStore
from tests.fakes import FakeDriveClient, RecordingRenderer


@pytest.fixture
def anyio_backend():
    return "asyncio"


@pytest.fixture
def store():
    return SheetRecordStore()


@pytest.fixture
def pdf_service(monkeypatch):
    service = PDFService()

    async def _no_network_assets():
        return EmbeddedAssets()

    monkeypatch.setattr(service, "load_assets", _no_network_assets)
    return service


@pytest.fixture
def renderer():
    return RecordingRenderer()


@pytest.fixture
def drive_client():
    return FakeDriveClient()


@pytest.fixture
def client(store, pdf_service, renderer, drive_client):
    app.dependency_overrides[get_record_store] = lambda: store
    app.dependency_overrides[get_pdf_service] = lambda: pdf_service
    app.dependency_overrides[get_pdf_renderer] = lambda: renderer
    app.dependency_overrides[get_drive_client] = lambda: drive_client
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()
