from fastapi.testclient import TestClient
from resume_parser.core.config import settings
from resume_parser.main import app

client = TestClient(app)


def test_parse_txt_returns_record_and_diagnostics():
    resume = b"""Jane Doe
jane.doe@example.com
(555) 123-4567
https://github.com/janedoe
Skills: Python, FastAPI, SQL
"""
    files = {"file": ("resume.txt", resume, "text/plain")}
    r = client.post("/parse", files=files)
    assert r.status_code == 200
    data = r.json()

    basics = data["resume"]["basics"]
    assert basics["name"] == "Jane Doe"
    assert basics["email"] == "jane.doe@example.com"
    assert basics["url"] == "https://github.com/janedoe"
    assert data["resume"]["skills"][0]["keywords"] == ["Python", "FastAPI", "SQL"]

    # inline "Skills:" headers are only recognized by the robust tier
    assert data["tier"] == "robust"
    assert data["sections_found"] == ["skills"]
    assert "No work experience entries detected" in data["warnings"]


def test_parse_text_endpoint_uses_camel_case_keys():
    text = "Jane Doe\n\nEXPERIENCE\nSenior Developer, Acme Corp\nJan 2020 - Present\n• Built APIs"
    r = client.post("/parse/text", json={"text": text})
    assert r.status_code == 200
    data = r.json()

    assert data["tier"] == "primary"
    job = data["resume"]["work"][0]
    assert job["position"] == "Senior Developer"
    assert job["startDate"] == "Jan 2020"
    assert job["endDate"] == "Present"
    assert job["summary"] == "Built APIs"


def test_parse_text_empty_is_total():
    r = client.post("/parse/text", json={"text": ""})
    assert r.status_code == 200
    data = r.json()
    assert data["resume"]["basics"]["name"] == ""
    assert data["resume"]["work"] == []
    assert data["resume"]["certifications"] == []


def test_sample_record():
    r = client.get("/sample")
    assert r.status_code == 200
    data = r.json()
    assert data["basics"]["name"] == "Jane Doe"
    assert data["work"][0]["startDate"] == "Jan 2020"
    assert data["education"][0]["studyType"] == "Bachelor's"
    assert data["certifications"] == []


def test_health():
    assert client.get("/health").json() == {"status": "ok"}
    assert client.get("/").json()["status"] == "running"


def test_empty_file_rejected():
    r = client.post("/parse", files={"file": ("resume.txt", b"", "text/plain")})
    assert r.status_code == 400


def test_unsupported_format_rejected():
    r = client.post("/parse", files={"file": ("photo.png", b"\x89PNG\r\n", "image/png")})
    assert r.status_code == 415


def test_oversized_upload_rejected(monkeypatch):
    monkeypatch.setattr(settings, "MAX_UPLOAD_SIZE_MB", 0)
    r = client.post("/parse", files={"file": ("resume.txt", b"Jane Doe", "text/plain")})
    assert r.status_code == 413


def test_corrupt_pdf_rejected():
    r = client.post("/parse", files={"file": ("resume.pdf", b"not a pdf at all", "application/pdf")})
    assert r.status_code == 422
