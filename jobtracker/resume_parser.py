"""Turn an uploaded resume file into a stored Resume.

Supports PDF (via pypdf), DOCX (via stdlib zipfile) and TXT. Structured
fields come from a heuristic regex pass over the raw text; the stored text is
the normalized version used for matching.
"""
from __future__ import annotations

import io
import re
import uuid
import zipfile
from datetime import datetime, timezone
from pathlib import PurePath
from xml.etree import ElementTree

from pypdf import PdfReader
from pypdf.errors import PdfReadError

from jobtracker.errors import InvalidInput
from jobtracker.log import get_logger
from jobtracker.models import ExtractedInfo, Resume
from jobtracker.skills import extract_skills
from jobtracker.storage import MemoryStorage
from jobtracker.text import clean_text, text_stats

log = get_logger(__name__)

PDF = "application/pdf"
TXT = "text/plain"
DOCX = "application/vnd.openxmlformats-officedocument.wordprocessingml.document"

EXPECTED_EXTENSIONS: dict[str, str] = {PDF: ".pdf", TXT: ".txt", DOCX: ".docx"}
MAX_UPLOAD_BYTES = 10 * 1024 * 1024
MAX_STORED_CHARS = 20_000
SUMMARY_CHARS = 500

# ── Text extraction ──────────────────────────────────────────────────────


def validate_upload(data: bytes, mime_type: str, file_name: str = "") -> list[str]:
    """Raise InvalidInput for unusable uploads; return non-fatal warnings."""
    if mime_type not in EXPECTED_EXTENSIONS:
        raise InvalidInput(f"Unsupported file type {mime_type!r}. Use PDF, TXT, or DOCX")
    if not data:
        raise InvalidInput("File is empty")
    if len(data) > MAX_UPLOAD_BYTES:
        raise InvalidInput(f"File size exceeds {MAX_UPLOAD_BYTES // (1024 * 1024)}MB limit")

    warnings: list[str] = []
    ext = PurePath(file_name).suffix.lower()
    if file_name and ext != EXPECTED_EXTENSIONS[mime_type]:
        warnings.append(f"File extension {ext or '(none)'} doesn't match MIME type {mime_type}")
    return warnings


def extract_text(data: bytes, mime_type: str) -> str:
    """Raw text from file bytes. Unreadable files raise InvalidInput."""
    if mime_type == TXT:
        return data.decode("utf-8", errors="ignore")
    if mime_type == PDF:
        try:
            return _extract_pdf(data)
        except PdfReadError as exc:
            raise InvalidInput(f"PDF parsing failed: {exc}") from exc
    if mime_type == DOCX:
        try:
            return _extract_docx(data)
        except (zipfile.BadZipFile, KeyError, ElementTree.ParseError) as exc:
            raise InvalidInput(f"DOCX parsing failed: {exc}") from exc
    raise InvalidInput(f"Unsupported file type {mime_type!r}")


def _fix_spacing(text: str) -> str:
    """Re-insert spaces when PDF extraction merges words together.

    Detects the problem by checking if the space-to-character ratio is
    abnormally low, then applies heuristic space insertion.
    """
    if not text or len(text) < 50:
        return text
    space_ratio = text.count(" ") / len(text)
    if space_ratio > 0.08:
        return text

    log.debug("Low space ratio (%.2f%%) — applying spacing fix", space_ratio * 100)
    fixed = re.sub(r"([a-z])([A-Z])", r"\1 \2", text)
    fixed = re.sub(r"([a-zA-Z])(\d)", r"\1 \2", fixed)
    fixed = re.sub(r"(\d)([a-zA-Z])", r"\1 \2", fixed)
    fixed = re.sub(r"([.!?,;:])([A-Za-z])", r"\1 \2", fixed)
    return fixed


def _extract_pdf(data: bytes) -> str:
    reader = PdfReader(io.BytesIO(data))
    pages = [_fix_spacing(page.extract_text() or "") for page in reader.pages]
    return "\n".join(pages)


def _extract_docx(data: bytes) -> str:
    """Parse DOCX using only stdlib (zipfile + xml)."""
    ns = "{http://schemas.openxmlformats.org/wordprocessingml/2006/main}"
    texts: list[str] = []
    with zipfile.ZipFile(io.BytesIO(data)) as zf:
        with zf.open("word/document.xml") as f:
            tree = ElementTree.parse(f)
            for para in tree.iter(f"{ns}p"):
                parts = [node.text for node in para.iter(f"{ns}t") if node.text]
                if parts:
                    texts.append("".join(parts))
    return "\n".join(texts)


# ── Heuristic extraction ─────────────────────────────────────────────────

_EMAIL_RE = re.compile(r"[A-Za-z0-9._%+-]+@[A-Za-z0-9.-]+\.[A-Za-z]{2,}")
_PHONE_RE = re.compile(r"[\+]?\d[\d\s\-().]{7,15}\d")
_LINKEDIN_RE = re.compile(r"linkedin\.com/in/[A-Za-z0-9\-_]+", re.IGNORECASE)
_YEARS_RE = re.compile(r"(\d{1,2})\+?\s*(?:years?|yrs?)", re.IGNORECASE)

_DEGREES: list[tuple[str, re.Pattern[str]]] = [
    ("Bachelor", re.compile(r"(?<!\w)(?:Bachelor'?s?|B\.?S\.?|B\.?A\.?|B\.?Tech)(?!\w)", re.IGNORECASE)),
    ("Master", re.compile(r"(?<!\w)(?:Master'?s?|M\.?S\.?|M\.?A\.?|M\.?Tech)(?!\w)", re.IGNORECASE)),
    ("PhD", re.compile(r"(?<!\w)(?:PhD|Ph\.D\.?|Doctorate)", re.IGNORECASE)),
]


def extract_resume_info(text: str) -> ExtractedInfo:
    """Best-effort structured fields from resume text."""
    text = text or ""
    info = ExtractedInfo(skills=extract_skills(text))

    email = _EMAIL_RE.search(text)
    if email:
        info.contact["email"] = email.group(0)
    phone = _PHONE_RE.search(text)
    if phone:
        info.contact["phone"] = phone.group(0).strip()
    linkedin = _LINKEDIN_RE.search(text)
    if linkedin:
        info.contact["linkedin"] = linkedin.group(0)

    years = [int(m.group(1)) for m in _YEARS_RE.finditer(text)]
    if years:
        info.experience_years = max(years)

    info.education = [label for label, pattern in _DEGREES if pattern.search(text)]

    flat = " ".join(text.split())
    info.summary = flat[:SUMMARY_CHARS] + ("..." if len(flat) > SUMMARY_CHARS else "")
    return info


# ── Public API ───────────────────────────────────────────────────────────


def ingest_resume(
    storage: MemoryStorage,
    user_id: str,
    data: bytes,
    mime_type: str,
    file_name: str = "",
) -> Resume:
    """Validate, parse and store a resume, replacing the user's previous one."""
    for warning in validate_upload(data, mime_type, file_name):
        log.warning("%s: %s", file_name or "upload", warning)

    log.info("Extracting text from %s (%s, %d bytes)", file_name or "upload", mime_type, len(data))
    raw = extract_text(data, mime_type)
    text = clean_text(raw)
    if not text:
        raise InvalidInput("The uploaded file appears to be empty")

    info = extract_resume_info(raw)
    resume = Resume(
        id=f"resume_{uuid.uuid4().hex[:12]}",
        user_id=user_id,
        text=text[:MAX_STORED_CHARS],
        extracted=info,
        uploaded_at=datetime.now(timezone.utc).isoformat(),
        file_name=file_name,
        file_type=mime_type,
    )
    storage.set_resume(user_id, resume)
    stats = text_stats(resume.text)
    log.info(
        "Resume stored for %s — %d skills found, %d words, %d unique",
        user_id,
        len(info.skills),
        stats["word_count"],
        stats["unique_words"],
    )
    return resume
