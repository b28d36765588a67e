"""Plain-text extraction from uploaded résumé files (PDF, DOCX, TXT).

The text is what the gateway sends to the model; nothing here interprets it.
"""
from __future__ import annotations

import re
import shutil
import subprocess
import zipfile
from pathlib import Path
from xml.etree import ElementTree

from pypdf import PdfReader
from pypdf.errors import PyPdfError

from jobscout.errors import validation_error
from jobscout.log import get_logger

log = get_logger(__name__)

SUPPORTED_SUFFIXES = (".pdf", ".docx", ".txt", ".md")
MAX_RESUME_CHARS = 12_000

_W_NS = "{http://schemas.openxmlformats.org/wordprocessingml/2006/main}"


def extract_text(path: Path) -> str:
    """Return the text of a résumé file; raises a validation error for
    unsupported or unreadable files."""
    suffix = path.suffix.lower()
    if suffix not in SUPPORTED_SUFFIXES:
        raise validation_error(
            f"Unsupported resume format '{suffix or path.name}'. Upload a PDF, DOCX or TXT file."
        )
    try:
        if suffix == ".pdf":
            text = _pdf_text(path)
        elif suffix == ".docx":
            text = _docx_text(path)
        else:
            text = path.read_text(encoding="utf-8", errors="ignore")
    except (OSError, zipfile.BadZipFile, KeyError, ElementTree.ParseError, PyPdfError) as exc:
        log.warning("Could not read %s: %s", path.name, exc)
        raise validation_error(f"Could not read {path.name}. Is it a valid {suffix[1:].upper()} file?") from exc

    text = text.strip()
    if not text:
        raise validation_error(
            f"No text found in {path.name}. Scanned PDFs are not supported; use a text-based PDF or TXT file."
        )
    log.info("Extracted %d characters from %s", len(text), path.name)
    return text[:MAX_RESUME_CHARS]


def _pdf_text(path: Path) -> str:
    # pdftotext keeps word spacing better than pypdf
    if shutil.which("pdftotext"):
        try:
            result = subprocess.run(
                ["pdftotext", "-layout", str(path), "-"],
                capture_output=True,
                text=True,
                timeout=30,
            )
        except subprocess.TimeoutExpired:
            log.warning("pdftotext timed out on %s, using pypdf", path.name)
        else:
            if result.returncode == 0 and result.stdout.strip():
                return result.stdout
            log.debug("pdftotext failed on %s (rc=%d), using pypdf", path.name, result.returncode)

    reader = PdfReader(str(path))
    return "\n".join(restore_spacing(page.extract_text() or "") for page in reader.pages)


def _docx_text(path: Path) -> str:
    paragraphs: list[str] = []
    with zipfile.ZipFile(path) as zf, zf.open("word/document.xml") as f:
        for para in ElementTree.parse(f).iter(f"{_W_NS}p"):
            runs = "".join(node.text for node in para.iter(f"{_W_NS}t") if node.text)
            if runs:
                paragraphs.append(runs)
    return "\n".join(paragraphs)


def restore_spacing(text: str) -> str:
    """Re-insert spaces that PDF extraction glued together.

    Only applied when spaces are abnormally rare (under 8% of characters).
    """
    if len(text) < 50 or text.count(" ") / len(text) > 0.08:
        return text
    for pattern, repl in (
        (r"([a-z])([A-Z])", r"\1 \2"),
        (r"([a-zA-Z])(\d)", r"\1 \2"),
        (r"(\d)([a-zA-Z])", r"\1 \2"),
        (r"([.!?,;:])([A-Za-z])", r"\1 \2"),
    ):
        text = re.sub(pattern, repl, text)
    return text
