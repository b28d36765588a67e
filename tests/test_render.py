from __future__ import annotations

from conftest import make_job

from jobscout.models import (
    ApplicationStatus,
    EducationEntry,
    ExperienceEntry,
    ResumeContact,
    SkillGroup,
    StructuredResume,
    TrackedJob,
)
from jobscout.render import export_resume, resume_to_markdown, tracker_summary

RESUME = StructuredResume(
    contact=ResumeContact(name="Pat Lee", email="pat@example.com", github="https://github.com/pat", portfolio="N/A"),
    summary="Backend engineer.",
    experience=[ExperienceEntry("Engineer", "Acme", "2021 - Present", "Remote", ["Built APIs", "Cut costs 20%"])],
    education=[EducationEntry("B.S. CS", "State University", "2019")],
    skills=[SkillGroup("Languages", "Python, Go")],
)


def test_resume_markdown_sections() -> None:
    md = resume_to_markdown(RESUME)
    assert md.startswith("# Pat Lee\n")
    assert "[GitHub](https://github.com/pat)" in md
    assert "Portfolio" not in md
    assert "### Engineer | Acme" in md
    assert "- Cut costs 20%" in md
    assert "- **Languages:** Python, Go" in md
    assert "- B.S. CS | State University (2019)" in md
    assert "## Projects" not in md


def test_export_resume(tmp_path) -> None:
    path = export_resume(RESUME, "Pat Lee / Acme", export_dir=tmp_path)
    assert path.parent == tmp_path
    assert path.name.startswith("pat-lee-acme_")
    assert path.read_text(encoding="utf-8") == resume_to_markdown(RESUME)


def test_tracker_summary() -> None:
    assert "No tracked jobs" in tracker_summary([])
    table = tracker_summary([TrackedJob.from_job(make_job("1", "SRE"), ApplicationStatus.APPLIED)])
    assert "| [SRE](https://jobs.example/1) | Acme | Applied |" in table
