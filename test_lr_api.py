#!/usr/bin/env python3
"""
Test LR API Endpoints and Logo Loading
Exercises the FastAPI routes with TestClient and the logo download with httpx.MockTransport
"""

import os
import sys
import base64
from urllib.parse import quote

import httpx
import pytest
from fastapi.testclient import TestClient
from PIL import Image

# Add the project root to sys.path
sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

from app.core.config import Settings
from app.main import app
from app.schemas.lr import CompanyProfile, HeaderConfig, StandaloneLRDocument, TemplateConfig
from app.services import logo_loader

client = TestClient(app)

BOOKING = {
    "booking_id": "BKG-20250101-0007",
    "lr_number": "LR-7788",
    "lr_date": "2025-01-15",
    "consignor": {"name": "Kaveri Agro Foods", "phone": 9822001122},
    "consignee": {"name": "Narmada Steel Traders"},
    "goods_items": "[{\"description\": \"Onion\", \"quantity\": \"20 BAGS\"}]",
    "freight_charges": "18500",
}
COMPANY = {"name": "Shree Roadways", "gst_number": "27AAACS1234F1Z9"}


def test_health_and_root():
    health = client.get("/health")
    assert health.status_code == 200
    assert health.json()["status"] == "healthy"

    root = client.get("/")
    assert root.json()["api_base"] == "/api/v1"


def test_templates_catalogue():
    response = client.get("/api/v1/lr/templates")
    assert response.status_code == 200
    codes = [t["code"] for t in response.json()["templates"]]
    assert codes == ["standard", "minimal", "detailed", "gst_invoice"]


def test_generator_info():
    info = client.get("/api/v1/lr/generator-info").json()
    assert info["status"] == "active"
    assert "gst_invoice" in info["supported_templates"]


def test_generate_pdf():
    response = client.post("/api/v1/lr/generate-pdf/minimal", json={
        "booking": BOOKING,
        "company": COMPANY,
        "template_config": {"visible_fields": {"consignee": False}, "unknown_section": {"x": 1}},
    })
    assert response.status_code == 200
    assert response.headers["content-type"] == "application/pdf"
    assert response.headers["content-disposition"] == "inline; filename=\"LR_LR-7788.pdf\"; filename*=UTF-8''LR_LR-7788.pdf"
    assert response.headers["cache-control"] == "no-cache, no-store, must-revalidate"
    assert response.content.startswith(b"%PDF")


def test_generate_pdf_unknown_template_uses_standard():
    response = client.post("/api/v1/lr/generate-pdf/fancy", json={
        "booking": BOOKING, "company": COMPANY, "template_config": {},
    })
    assert response.status_code == 200
    assert response.content.startswith(b"%PDF")


@pytest.mark.parametrize("missing", ["booking", "company", "template_config"])
def test_generate_pdf_missing_input(missing):
    body = {"booking": BOOKING, "company": COMPANY, "template_config": {}}
    del body[missing]
    response = client.post("/api/v1/lr/generate-pdf/standard", json=body)
    assert response.status_code == 400
    assert "required" in response.json()["detail"]


def test_standalone_pdf():
    response = client.post("/api/v1/lr/standalone/generate-pdf", json={
        "lr": {
            "standalone_lr_number": "SLR-0042",
            "consignor_name": "Kaveri Agro Foods",
            "consignee_name": "Narmada Steel Traders",
            "freight_amount": 9000,
            "template_code": "detailed",
        },
    })
    assert response.status_code == 200
    assert response.headers["content-disposition"] == (
        "inline; filename=\"Standalone_LR_SLR-0042.pdf\"; filename*=UTF-8''Standalone_LR_SLR-0042.pdf"
    )


def test_non_ascii_lr_number_in_file_name():
    booking = dict(BOOKING, lr_number="LR-२०२४")
    response = client.post("/api/v1/lr/generate-pdf/standard", json={
        "booking": booking, "company": COMPANY, "template_config": {},
    })
    assert response.status_code == 200
    disposition = response.headers["content-disposition"]
    assert 'filename="LR_LR-____.pdf"' in disposition
    assert "filename*=UTF-8''" + quote("LR_LR-२०२४.pdf") in disposition


def test_standalone_pdf_without_lr():
    response = client.post("/api/v1/lr/standalone/generate-pdf", json={})
    assert response.status_code == 400


@pytest.mark.parametrize("code", ["standard", "minimal", "detailed", "gst_invoice"])
def test_sample_pdf(code):
    response = client.get(f"/api/v1/lr/sample-pdf/{code}")
    assert response.status_code == 200
    assert response.headers["content-disposition"] == "inline; filename=\"LR_LR2024001.pdf\"; filename*=UTF-8''LR_LR2024001.pdf"
    assert int(response.headers["content-length"]) == len(response.content)


def png_file(tmp_path):
    path = tmp_path / "logo.png"
    Image.new("RGB", (40, 30), "red").save(path, format="PNG")
    return str(path)


def test_malformed_logo_url_still_renders():
    company = dict(COMPANY, logo_url="http://[::1")
    response = client.post("/api/v1/lr/generate-pdf/standard", json={
        "booking": BOOKING, "company": company, "template_config": {},
    })
    assert response.status_code == 200


def test_server_file_logo_is_not_embedded(tmp_path):
    path = png_file(tmp_path)
    with open(path, "rb") as f:
        data_uri = "data:image/png;base64," + base64.b64encode(f.read()).decode("ascii")

    def render_with(logo_url):
        response = client.post("/api/v1/lr/generate-pdf/standard", json={
            "booking": BOOKING, "company": dict(COMPANY, logo_url=logo_url), "template_config": {},
        })
        assert response.status_code == 200
        return response.content

    assert b"/Subtype /Image" in render_with(data_uri)
    assert b"/Subtype /Image" not in render_with(path)


def test_remote_logo_failure_still_renders(monkeypatch):
    requested = []

    def fake_fetch(url, timeout, max_bytes, client=None):
        requested.append(url)
        return None

    monkeypatch.setattr(logo_loader, "fetch_logo", fake_fetch)
    company = dict(COMPANY, logo_url="https://cdn.example.com/shree.png")
    response = client.post("/api/v1/lr/generate-pdf/standard", json={
        "booking": BOOKING, "company": company, "template_config": {},
    })
    assert response.status_code == 200
    assert requested == ["https://cdn.example.com/shree.png"]


# Logo loader

PNG_BYTES = b"\x89PNG\r\n\x1a\n" + b"\x00" * 64


def mock_client(handler):
    return httpx.Client(transport=httpx.MockTransport(handler))


def test_fetch_logo_returns_body():
    with mock_client(lambda request: httpx.Response(200, content=PNG_BYTES)) as http:
        assert logo_loader.fetch_logo("https://cdn.example.com/a.png", 5.0, 1024, client=http) == PNG_BYTES


def test_fetch_logo_http_error_gives_none():
    with mock_client(lambda request: httpx.Response(404)) as http:
        assert logo_loader.fetch_logo("https://cdn.example.com/missing.png", 5.0, 1024, client=http) is None


def test_fetch_logo_connection_error_gives_none():
    def handler(request):
        raise httpx.ConnectError("connection refused", request=request)

    with mock_client(handler) as http:
        assert logo_loader.fetch_logo("https://cdn.example.com/a.png", 5.0, 1024, client=http) is None


def test_fetch_logo_size_cap():
    with mock_client(lambda request: httpx.Response(200, content=b"x" * 2048)) as http:
        assert logo_loader.fetch_logo("https://cdn.example.com/huge.png", 5.0, 1024, client=http) is None


def test_prefetch_downloads_remote_and_decodes_inline_logos():
    seen = []

    def handler(request):
        seen.append(str(request.url))
        return httpx.Response(200, content=PNG_BYTES)

    company = CompanyProfile(name="Shree Roadways", logo_url="https://cdn.example.com/company.png")
    config = TemplateConfig(header_config=HeaderConfig(logo_url="data:image/png;base64,AAAA"))

    with mock_client(handler) as http:
        new_company, new_config = logo_loader.prefetch_logos(company, config, Settings(), client=http)

    assert new_company.logo_url == PNG_BYTES
    assert new_config.header_config.logo_url == base64.b64decode("AAAA")
    assert seen == ["https://cdn.example.com/company.png"]
    # inputs are not modified
    assert company.logo_url == "https://cdn.example.com/company.png"


def test_prefetch_disabled_leaves_urls():
    def handler(request):
        raise AssertionError("no request expected")

    company = CompanyProfile(logo_url="https://cdn.example.com/company.png")
    with mock_client(handler) as http:
        new_company, _ = logo_loader.prefetch_logos(company, None, Settings(ENABLE_LOGO_FETCH=False), client=http)
    assert new_company.logo_url == "https://cdn.example.com/company.png"


def test_prefetch_standalone_logo():
    lr = StandaloneLRDocument(standalone_lr_number="SLR-1", company_logo_url="http://cdn.example.com/s.png")
    with mock_client(lambda request: httpx.Response(200, content=PNG_BYTES)) as http:
        fetched = logo_loader.prefetch_standalone_logo(lr, Settings(), client=http)
    assert fetched.company_logo_url == PNG_BYTES
    assert logo_loader.prefetch_standalone_logo(None) is None


def test_fetch_logo_invalid_url_gives_none():
    assert logo_loader.fetch_logo("http://[::1", 2.0, 1000) is None


def test_prefetch_drops_file_paths(tmp_path):
    path = png_file(tmp_path)
    company = CompanyProfile(name="Shree Roadways", logo_url=path)
    config = TemplateConfig(header_config=HeaderConfig(logo_url=path))
    new_company, new_config = logo_loader.prefetch_logos(company, config, Settings())
    assert new_company.logo_url is None
    assert new_config.header_config.logo_url is None

    lr = StandaloneLRDocument(standalone_lr_number="SLR-1", company_logo_url=path)
    assert logo_loader.prefetch_standalone_logo(lr, Settings()).company_logo_url is None


def test_inline_logo():
    assert logo_loader.inline_logo("data:image/png;base64,AAAA") == b"\x00\x00\x00"
    assert logo_loader.inline_logo("AAAA\nAAAA") == b"\x00" * 6
    assert logo_loader.inline_logo("/etc/hosts") is None
    assert logo_loader.inline_logo("") is None
