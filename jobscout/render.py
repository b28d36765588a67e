"""Render a tailored résumé as Markdown and export it."""
from __future__ import annotations

import re
from datetime import datetime, timezone
from pathlib import Path

from jobscout.config import EXPORT_DIR
from jobscout.log import get_logger
from jobscout.models import StructuredResume, TrackedJob

log = get_logger(__name__)


def _contact_line(resume: StructuredResume) -> str:
    c = resume.contact
    parts = [c.phone, c.location, c.email]
    parts += [f"[{label}]({url})" for label, url in (
        ("LinkedIn", c.linkedin), ("GitHub", c.github), ("Portfolio", c.portfolio)
    ) if url and url.upper() != "N/A"]
    return " | ".join(p for p in parts if p)


def resume_to_markdown(resume: StructuredResume) -> str:
    lines: list[str] = [f"# {resume.contact.name or 'Resume'}"]
    contact = _contact_line(resume)
    if contact:
        lines.append(contact)
    lines.append("")

    if resume.summary:
        lines += ["## Summary", "", resume.summary, ""]

    if resume.experience:
        lines += ["## Experience", ""]
        for e in resume.experience:
            heading = " | ".join(p for p in (e.title, e.company) if p)
            meta = ", ".join(p for p in (e.dates, e.location) if p)
            lines.append(f"### {heading}")
            if meta:
                lines.append(f"*{meta}*")
            lines.append("")
            lines += [f"- {point}" for point in e.points]
            lines.append("")

    if resume.projects:
        lines += ["## Projects", ""]
        for p in resume.projects:
            lines.append(f"### {p.name}")
            lines += [f"- {point}" for point in p.points]
            lines.append("")

    if resume.skills:
        lines += ["## Skills", ""]
        lines += [f"- **{s.category}:** {s.items}" if s.category else f"- {s.items}" for s in resume.skills]
        lines.append("")

    if resume.education:
        lines += ["## Education", ""]
        for ed in resume.education:
            line = " | ".join(p for p in (ed.degree, ed.university) if p)
            lines.append(f"- {line}" + (f" ({ed.dates})" if ed.dates else ""))
        lines.append("")

    return "\n".join(lines).rstrip() + "\n"


def tracker_summary(tracked: list[TrackedJob]) -> str:
    """Markdown table of tracked applications, newest first."""
    if not tracked:
        return "_No tracked jobs yet._\n"
    lines = ["| Title | Company | Status | Posted |", "|---|---|---|---|"]
    for t in tracked:
        title = f"[{t.title}]({t.source_url})" if t.source_url else t.title
        lines.append(f"| {title} | {t.company} | {t.status.value} | {t.posted_date} |")
    return "\n".join(lines) + "\n"


def _slug(text: str) -> str:
    return re.sub(r"[^a-z0-9]+", "-", text.lower()).strip("-") or "resume"


def export_resume(resume: StructuredResume, name: str, export_dir: Path | None = None) -> Path:
    """Write the résumé to ``<export_dir>/<slug>_<date>.md`` and return the path."""
    export_dir = export_dir or EXPORT_DIR
    export_dir.mkdir(parents=True, exist_ok=True)
    date = datetime.now(timezone.utc).strftime("%Y-%m-%d")
    path = export_dir / f"{_slug(name)}_{date}.md"
    path.write_text(resume_to_markdown(resume), encoding="utf-8")
    log.info("Exported resume → %s", path.name)
    return path
