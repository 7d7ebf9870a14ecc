from __future__ import annotations

import io
import logging
import zipfile

import pytest

from jobtracker.errors import InvalidInput
from jobtracker.resume_parser import (
    DOCX,
    MAX_UPLOAD_BYTES,
    TXT,
    extract_resume_info,
    extract_text,
    ingest_resume,
    validate_upload,
)
from jobtracker.storage import MemoryStorage

SAMPLE = (
    "Jane Doe\n"
    "Email: jane@example.com\n"
    "Phone: (555) 123-4567\n"
    "linkedin.com/in/janedoe\n"
    "Senior engineer with 7+ years of Python, React and AWS. 3 years leading teams.\n"
    "B.S. in Computer Science; Master's in Data Science"
)


def make_docx(paragraphs: list[str]) -> bytes:
    ns = "http://schemas.openxmlformats.org/wordprocessingml/2006/main"
    body = "".join(f"<w:p><w:r><w:t>{p}</w:t></w:r></w:p>" for p in paragraphs)
    xml = f'<?xml version="1.0" encoding="UTF-8"?><w:document xmlns:w="{ns}"><w:body>{body}</w:body></w:document>'
    buf = io.BytesIO()
    with zipfile.ZipFile(buf, "w") as zf:
        zf.writestr("word/document.xml", xml)
    return buf.getvalue()


def test_extract_resume_info() -> None:
    info = extract_resume_info(SAMPLE)
    assert info.skills == ["Python", "React", "AWS"]
    assert info.contact["email"] == "jane@example.com"
    assert "123-4567" in info.contact["phone"]
    assert info.contact["linkedin"] == "linkedin.com/in/janedoe"
    assert info.experience_years == 7
    assert info.education == ["Bachelor", "Master"]
    assert info.summary.startswith("Jane Doe Email:")


def test_extract_resume_info_empty() -> None:
    info = extract_resume_info("")
    assert info.skills == [] and info.contact == {} and info.experience_years is None


def test_ingest_txt() -> None:
    storage = MemoryStorage()
    resume = ingest_resume(storage, "u1", SAMPLE.encode(), TXT, "jane.txt")
    assert storage.get_resume("u1") is resume
    assert resume.id.startswith("resume_")
    assert resume.file_type == TXT
    assert "jane@example.com" not in resume.text
    assert "7+ years of Python" in resume.text
    assert resume.extracted.contact["email"] == "jane@example.com"


def test_ingest_replaces_previous_resume() -> None:
    storage = MemoryStorage()
    ingest_resume(storage, "u1", b"First resume with Java", TXT)
    second = ingest_resume(storage, "u1", b"Second resume with Go and Rust", TXT)
    assert storage.get_resume("u1") is second


def test_ingest_docx() -> None:
    storage = MemoryStorage()
    data = make_docx(["John Smith", "Kubernetes and Docker engineer, 4 years"])
    resume = ingest_resume(storage, "u1", data, DOCX, "john.docx")
    assert "Kubernetes and Docker engineer" in resume.text
    assert resume.extracted.skills == ["Docker", "Kubernetes"]
    assert resume.extracted.experience_years == 4


def _zip_without_document() -> bytes:
    buf = io.BytesIO()
    with zipfile.ZipFile(buf, "w") as zf:
        zf.writestr("readme.txt", "hi")
    return buf.getvalue()


def test_corrupt_docx_is_invalid_input() -> None:
    with pytest.raises(InvalidInput):
        extract_text(b"not a zip", DOCX)
    with pytest.raises(InvalidInput):
        extract_text(_zip_without_document(), DOCX)


def test_boilerplate_only_file_is_rejected() -> None:
    with pytest.raises(InvalidInput, match="empty"):
        ingest_resume(MemoryStorage(), "u1", b"Page 1 of 2\nConfidential", TXT)


@pytest.mark.parametrize(
    "data, mime",
    [
        (b"hello", "image/png"),
        (b"", TXT),
        (b"x" * (MAX_UPLOAD_BYTES + 1), TXT),
    ],
)
def test_validate_upload_rejects(data: bytes, mime: str) -> None:
    with pytest.raises(InvalidInput):
        validate_upload(data, mime)


def test_extension_mismatch_is_only_a_warning() -> None:
    warnings = validate_upload(b"hello", TXT, "resume.pdf")
    assert len(warnings) == 1 and ".pdf" in warnings[0]
    assert validate_upload(b"hello", TXT, "resume.TXT") == []


def test_ingest_logs_text_stats(caplog: pytest.LogCaptureFixture) -> None:
    caplog.set_level(logging.INFO, logger="jobtracker.resume_parser")
    ingest_resume(MemoryStorage(), "u1", b"Python Python developer", TXT)
    assert "3 words, 2 unique" in caplog.text
