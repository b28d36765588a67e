"""Demo data used when no backing store is configured, and placeholder
results for degraded AI calls."""
from __future__ import annotations

from dataclasses import dataclass, field, replace
from pathlib import Path

from jobscout.config import load_profile_overrides
from jobscout.log import get_logger
from jobscout.models import (
    ApplicationFormField,
    ApplicationStatus,
    Job,
    ParsedApplicationForm,
    PotentialContact,
    TrackedJob,
    UserProfile,
)

log = get_logger(__name__)

DEMO_RESUME = """\
ALEX MORGAN
+1 555 0100 | Austin, TX | alex.morgan@example.com | LinkedIn | GitHub

SUMMARY
Full-stack engineer with five years of experience shipping data-heavy web
products. Built internal automation that saved 40+ hours of manual work a week.

EXPERIENCE
Software Engineer | DataStream Labs | 2021 - Present, Remote
- Built a Python ingestion service processing 2M events/day on AWS.
- Led the migration of a React dashboard to TypeScript, cutting bug reports by 30%.
- Mentored three junior engineers through code review and pairing.

Junior Developer | Brightline Apps | 2019 - 2021, Austin, TX
- Delivered REST APIs in Node.js and PostgreSQL for a mobile ordering app.

PROJECTS
Job Board Aggregator
- Scraped and normalised 50k postings/week with Python and Postgres full-text search.

SKILLS
Languages: Python, TypeScript, SQL
Frameworks & Libraries: React, Node.js, FastAPI, Pandas
Tools & Platforms: Git, Docker, AWS, GitHub Actions

EDUCATION
B.S. Computer Science | University of Texas at Austin | 2019
"""

DEMO_PROFILE = UserProfile(
    name="Alex Morgan",
    email="alex.morgan@example.com",
    phone="+1 555 0100",
    bio=(
        "Full-stack engineer with five years of experience shipping data-heavy web products, "
        "looking for a product-minded team working on developer or data tooling."
    ),
    base_resume=DEMO_RESUME,
    linkedin_url="https://www.linkedin.com/in/alex-morgan-demo",
    github_url="https://github.com/alex-morgan-demo",
)

CATALOG: tuple[Job, ...] = (
    Job(
        id="1",
        title="Senior Frontend Engineer",
        company="Innovatech",
        location="San Francisco, CA",
        description=(
            "Innovatech is seeking a Senior Frontend Engineer to build our next-generation platform. "
            "You will work with React, TypeScript and GraphQL to create fast, accessible interfaces."
        ),
        tags=["React", "TypeScript", "GraphQL"],
        salary="$150,000 - $180,000",
        posted_date="5 days ago",
    ),
    Job(
        id="2",
        title="Product Manager, AI",
        company="FutureAI",
        location="New York, NY (Remote)",
        description=(
            "Lead our AI-powered products: define product strategy, work with engineering teams "
            "and drive launches. Familiarity with machine learning concepts is a plus."
        ),
        tags=["Product Management", "AI/ML", "Remote"],
        salary="$160,000 - $190,000",
        posted_date="2 days ago",
    ),
    Job(
        id="3",
        title="UX/UI Designer",
        company="Creative Minds",
        location="Austin, TX",
        description=(
            "Own the design process from user research to high-fidelity prototypes. "
            "Proficiency in Figma is required."
        ),
        tags=["UX", "UI", "Figma"],
        salary="$110,000 - $130,000",
        posted_date="1 week ago",
    ),
    Job(
        id="4",
        title="Full Stack Developer",
        company="DataStream",
        location="Chicago, IL",
        description=(
            "Work on our core data processing pipeline with Node.js, Python, React and PostgreSQL. "
            "We value clean code and a collaborative spirit."
        ),
        tags=["Node.js", "Python", "React"],
        salary="$130,000 - $155,000",
        posted_date="10 days ago",
    ),
)

SAMPLE_CONTACTS: tuple[PotentialContact, ...] = (
    PotentialContact(name="Jane Doe", title="Senior Technical Recruiter", email="jane.doe@example.com"),
    PotentialContact(name="John Smith", title="Hiring Manager, Engineering", email="john.smith@example.com"),
    PotentialContact(name="Emily White", title="Talent Acquisition Partner", email="emily.white@example.com"),
)


def load_seed_profile(path: Path | None = None) -> UserProfile:
    """The demo profile with ``config/profile.yaml`` overrides applied."""
    overrides = load_profile_overrides(path)
    if not overrides:
        return replace(DEMO_PROFILE)
    log.info("Applying %d profile override(s) from config", len(overrides))
    merged = DEMO_PROFILE.to_dict()
    merged.update({k: v for k, v in overrides.items() if k in merged})
    return UserProfile.from_dict(merged)


def demo_catalog() -> list[Job]:
    return [replace(job, tags=list(job.tags)) for job in CATALOG]


def demo_tracked() -> list[TrackedJob]:
    return [
        TrackedJob.from_job(CATALOG[0], ApplicationStatus.INTERVIEWING),
        TrackedJob.from_job(CATALOG[2], ApplicationStatus.APPLIED),
        TrackedJob.from_job(CATALOG[3], ApplicationStatus.SAVED),
    ]


def demo_wishlist() -> list[Job]:
    return [replace(CATALOG[2], tags=list(CATALOG[2].tags), is_wishlisted=True)]


def sample_contacts() -> list[PotentialContact]:
    return [replace(c) for c in SAMPLE_CONTACTS]


def placeholder_form(job: Job, profile: UserProfile) -> ParsedApplicationForm:
    """Form prefilled only from the profile, for when the page cannot be analyzed."""
    basic = [
        ApplicationFormField(id="name", label="Full Name", type="text", value=profile.name),
        ApplicationFormField(id="email", label="Email", type="text", value=profile.email),
        ApplicationFormField(id="phone", label="Phone", type="text", value=profile.phone),
        ApplicationFormField(id="linkedin", label="LinkedIn", type="text", value=profile.linkedin_url or ""),
        ApplicationFormField(id="resume", label="Resume", type="file", value="Attach your resume"),
    ]
    custom = [
        ApplicationFormField(
            id="why",
            label=f"Why do you want to work at {job.company}?",
            type="textarea",
            value=f"[Sample answer] I am excited about the {job.title} role and how it fits my experience: {profile.bio}",
        ),
    ]
    return ParsedApplicationForm(basic_info=basic, custom_questions=custom)


@dataclass
class SeedData:
    """Initial collections for a store with no stored data for the user."""

    profile: UserProfile = field(default_factory=UserProfile)
    catalog: list[Job] = field(default_factory=list)
    tracked: list[TrackedJob] = field(default_factory=list)
    wishlist: list[Job] = field(default_factory=list)


def default_seed() -> SeedData:
    return SeedData(
        profile=load_seed_profile(),
        catalog=demo_catalog(),
        tracked=demo_tracked(),
        wishlist=demo_wishlist(),
    )
