"""Data models for profiles, jobs, tracked applications and AI results."""
from __future__ import annotations

from dataclasses import asdict, dataclass, field, fields
from enum import Enum
from typing import Any, Generic, Mapping, TypeVar

from jobscout.parsing import as_dict, as_list, as_optional_str, as_str, as_str_list

T = TypeVar("T")

NOT_SPECIFIED = "Not specified"


@dataclass
class UserProfile:
    name: str = ""
    email: str = ""
    phone: str = ""
    bio: str = ""
    base_resume: str = ""
    profile_picture_url: str | None = None
    cover_photo_url: str | None = None
    linkedin_url: str | None = None
    github_url: str | None = None
    portfolio_url: str | None = None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> UserProfile:
        d = dict(data)
        return cls(
            name=as_str(d.get("name")),
            email=as_str(d.get("email")),
            phone=as_str(d.get("phone")),
            bio=as_str(d.get("bio")),
            base_resume=as_str(d.get("base_resume")),
            profile_picture_url=as_optional_str(d.get("profile_picture_url")),
            cover_photo_url=as_optional_str(d.get("cover_photo_url")),
            linkedin_url=as_optional_str(d.get("linkedin_url")),
            github_url=as_optional_str(d.get("github_url")),
            portfolio_url=as_optional_str(d.get("portfolio_url")),
        )

    def with_claims(self, claims: Mapping[str, Any]) -> UserProfile:
        """Overlay identity-provider claims (name, email, phone, picture)."""
        return UserProfile(
            name=as_str(claims.get("name"), self.name),
            email=as_str(claims.get("email"), self.email),
            phone=as_str(claims.get("phone"), self.phone),
            bio=self.bio,
            base_resume=self.base_resume,
            profile_picture_url=as_optional_str(claims.get("picture")) or self.profile_picture_url,
            cover_photo_url=self.cover_photo_url,
            linkedin_url=self.linkedin_url,
            github_url=self.github_url,
            portfolio_url=self.portfolio_url,
        )

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


@dataclass
class Job:
    id: str
    title: str
    company: str
    location: str
    description: str
    tags: list[str] = field(default_factory=list)
    salary: str = NOT_SPECIFIED
    posted_date: str = "Recently"
    source_url: str | None = None
    is_wishlisted: bool = False

    @classmethod
    def from_dict(cls, data: Mapping[str, Any], *, default_id: str = "") -> Job:
        d = dict(data)
        return cls(
            id=as_str(d.get("id"), default_id),
            title=as_str(d.get("title"), "No title provided"),
            company=as_str(d.get("company"), "No company provided"),
            location=as_str(d.get("location"), "No location provided"),
            description=as_str(d.get("description"), "No description provided."),
            tags=as_str_list(d.get("tags"), split=True),
            salary=as_str(d.get("salary"), NOT_SPECIFIED),
            posted_date=as_str(d.get("posted_date") or d.get("postedDate"), "Recently"),
            source_url=as_optional_str(d.get("source_url") or d.get("sourceUrl")),
            is_wishlisted=bool(d.get("is_wishlisted", False)),
        )

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)

    def job_fields(self) -> dict[str, Any]:
        """Only the posting fields, without any tracking data."""
        return {f.name: getattr(self, f.name) for f in fields(Job)}


class ApplicationStatus(str, Enum):
    SAVED = "Saved"
    APPLIED = "Applied"
    INTERVIEWING = "Interviewing"
    OFFER = "Offer"
    REJECTED = "Rejected"


STATUS_ORDER: tuple[ApplicationStatus, ...] = (
    ApplicationStatus.SAVED,
    ApplicationStatus.APPLIED,
    ApplicationStatus.INTERVIEWING,
    ApplicationStatus.OFFER,
    ApplicationStatus.REJECTED,
)


@dataclass
class OfferDetails:
    salary: str = ""
    bonus: str = ""
    equity: str = ""

    @classmethod
    def from_dict(cls, data: Any) -> OfferDetails:
        d = as_dict(data)
        return cls(salary=as_str(d.get("salary")), bonus=as_str(d.get("bonus")), equity=as_str(d.get("equity")))


@dataclass
class ApplicationInsights:
    strengths: list[str] = field(default_factory=list)
    talking_points: list[str] = field(default_factory=list)
    red_flags: list[str] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Any) -> ApplicationInsights:
        d = as_dict(data)
        return cls(
            strengths=as_str_list(d.get("strengths")),
            talking_points=as_str_list(d.get("talking_points") or d.get("talkingPoints")),
            red_flags=as_str_list(d.get("red_flags") or d.get("redFlags")),
        )


# ── Structured résumé ────────────────────────────────────────────────────


@dataclass
class ResumeContact:
    name: str = ""
    email: str = ""
    phone: str = ""
    linkedin: str = ""
    github: str = ""
    portfolio: str = ""
    location: str = ""


@dataclass
class ExperienceEntry:
    title: str = ""
    company: str = ""
    dates: str = ""
    location: str = ""
    points: list[str] = field(default_factory=list)


@dataclass
class EducationEntry:
    degree: str = ""
    university: str = ""
    dates: str = ""


@dataclass
class ProjectEntry:
    name: str = ""
    points: list[str] = field(default_factory=list)


@dataclass
class SkillGroup:
    category: str = ""
    items: str = ""


@dataclass
class StructuredResume:
    contact: ResumeContact = field(default_factory=ResumeContact)
    summary: str = ""
    experience: list[ExperienceEntry] = field(default_factory=list)
    education: list[EducationEntry] = field(default_factory=list)
    projects: list[ProjectEntry] = field(default_factory=list)
    skills: list[SkillGroup] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Any) -> StructuredResume:
        d = as_dict(data)
        c = as_dict(d.get("contact"))
        return cls(
            contact=ResumeContact(**{f.name: as_str(c.get(f.name)) for f in fields(ResumeContact)}),
            summary=as_str(d.get("summary")),
            experience=[
                ExperienceEntry(
                    title=as_str(e.get("title")),
                    company=as_str(e.get("company")),
                    dates=as_str(e.get("dates")),
                    location=as_str(e.get("location")),
                    points=as_str_list(e.get("points")),
                )
                for e in map(as_dict, as_list(d.get("experience")))
            ],
            education=[
                EducationEntry(
                    degree=as_str(e.get("degree")),
                    university=as_str(e.get("university")),
                    dates=as_str(e.get("dates")),
                )
                for e in map(as_dict, as_list(d.get("education")))
            ],
            projects=[
                ProjectEntry(name=as_str(p.get("name")), points=as_str_list(p.get("points")))
                for p in map(as_dict, as_list(d.get("projects")))
            ],
            skills=[
                SkillGroup(category=as_str(s.get("category")), items=_skill_list(s.get("list") or s.get("items")))
                for s in map(as_dict, as_list(d.get("skills")))
            ],
        )


def _skill_list(value: Any) -> str:
    if isinstance(value, list):
        return ", ".join(as_str_list(value))
    return as_str(value)


# ── Tracked jobs ─────────────────────────────────────────────────────────


@dataclass
class TrackedJob(Job):
    status: ApplicationStatus = ApplicationStatus.SAVED
    notes: str = ""
    tailored_resume: str | None = None
    tailored_cover_letter: str | None = None
    offer_details: OfferDetails | None = None
    application_insights: ApplicationInsights | None = None
    structured_resume: StructuredResume | None = None

    @classmethod
    def from_job(cls, job: Job, status: ApplicationStatus = ApplicationStatus.SAVED) -> TrackedJob:
        return cls(**job.job_fields(), status=status, notes="")

    @classmethod
    def from_dict(cls, data: Mapping[str, Any], *, default_id: str = "") -> TrackedJob:
        d = dict(data)
        base = Job.from_dict(d, default_id=default_id)
        try:
            status = ApplicationStatus(d.get("status") or ApplicationStatus.SAVED)
        except ValueError:
            status = ApplicationStatus.SAVED
        offer = d.get("offer_details")
        insights = d.get("application_insights")
        resume = d.get("structured_resume")
        return cls(
            **base.job_fields(),
            status=status,
            notes=as_str(d.get("notes")),
            tailored_resume=as_optional_str(d.get("tailored_resume")),
            tailored_cover_letter=as_optional_str(d.get("tailored_cover_letter")),
            offer_details=OfferDetails.from_dict(offer) if offer else None,
            application_insights=ApplicationInsights.from_dict(insights) if insights else None,
            structured_resume=StructuredResume.from_dict(resume) if resume else None,
        )

    def to_dict(self) -> dict[str, Any]:
        data = asdict(self)
        data["status"] = self.status.value
        return data


# Fields save_tracked_job_data may merge; identity and status never.
TRACKED_DATA_FIELDS: frozenset[str] = frozenset({
    "notes",
    "tailored_resume",
    "tailored_cover_letter",
    "offer_details",
    "application_insights",
    "structured_resume",
})


# ── Generation results ───────────────────────────────────────────────────


@dataclass
class InterviewQuestion:
    question: str
    tip: str = ""


@dataclass
class QuestionCategory:
    category: str
    questions: list[InterviewQuestion] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Any) -> QuestionCategory:
        d = as_dict(data)
        questions = [
            InterviewQuestion(question=as_str(q.get("question")), tip=as_str(q.get("tip")))
            for q in map(as_dict, as_list(d.get("questions")))
            if as_str(q.get("question"))
        ]
        return cls(category=as_str(d.get("category"), "General"), questions=questions)


@dataclass
class SkillAnalysis:
    matching_skills: list[str] = field(default_factory=list)
    missing_skills: list[str] = field(default_factory=list)
    suggestions: str = ""

    @classmethod
    def from_dict(cls, data: Any) -> SkillAnalysis:
        d = as_dict(data)
        return cls(
            matching_skills=as_str_list(d.get("matching_skills") or d.get("matchingSkills")),
            missing_skills=as_str_list(d.get("missing_skills") or d.get("missingSkills")),
            suggestions=as_str(d.get("suggestions")),
        )


@dataclass
class InterviewFeedback:
    feedback: str = ""
    suggestions: list[str] = field(default_factory=list)
    body_language_feedback: str | None = None
    pacing_feedback: str | None = None

    @classmethod
    def from_dict(cls, data: Any) -> InterviewFeedback:
        d = as_dict(data)
        return cls(
            feedback=as_str(d.get("feedback")),
            suggestions=as_str_list(d.get("suggestions")),
            body_language_feedback=as_optional_str(d.get("body_language_feedback") or d.get("bodyLanguageFeedback")),
            pacing_feedback=as_optional_str(d.get("pacing_feedback") or d.get("pacingFeedback")),
        )


@dataclass
class CompanyBriefing:
    mission: str = ""
    recent_news: str = ""
    culture: str = ""
    interview_questions: list[str] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Any) -> CompanyBriefing:
        d = as_dict(data)
        return cls(
            mission=as_str(d.get("mission")),
            recent_news=as_str(d.get("recent_news") or d.get("recentNews")),
            culture=as_str(d.get("culture")),
            interview_questions=as_str_list(d.get("interview_questions") or d.get("interviewQuestions")),
        )


@dataclass
class NegotiationAnalysis:
    competitiveness: str = ""
    recommended_range: str = ""
    script: str = ""

    @classmethod
    def from_dict(cls, data: Any) -> NegotiationAnalysis:
        d = as_dict(data)
        return cls(
            competitiveness=as_str(d.get("competitiveness")),
            recommended_range=as_str(d.get("recommended_range") or d.get("recommendedRange")),
            script=as_str(d.get("script")),
        )


@dataclass
class PotentialContact:
    name: str
    title: str
    linkedin_url: str | None = None
    email: str | None = None

    @classmethod
    def from_dict(cls, data: Any) -> PotentialContact:
        d = as_dict(data)
        return cls(
            name=as_str(d.get("name"), "Unknown"),
            title=as_str(d.get("title")),
            linkedin_url=as_optional_str(d.get("linkedin_url") or d.get("linkedinUrl")),
            email=as_optional_str(d.get("email")),
        )


@dataclass
class CareerPathPlan:
    current_role: str = ""
    goal_role: str = ""
    key_skills_to_develop: list[str] = field(default_factory=list)
    project_ideas: list[str] = field(default_factory=list)
    bridge_roles: list[str] = field(default_factory=list)
    timeline: str = ""

    @classmethod
    def from_dict(cls, data: Any) -> CareerPathPlan:
        d = as_dict(data)
        return cls(
            current_role=as_str(d.get("current_role") or d.get("currentRole")),
            goal_role=as_str(d.get("goal_role") or d.get("goalRole")),
            key_skills_to_develop=as_str_list(d.get("key_skills_to_develop") or d.get("keySkillsToDevelop")),
            project_ideas=as_str_list(d.get("project_ideas") or d.get("projectIdeas")),
            bridge_roles=as_str_list(d.get("bridge_roles") or d.get("bridgeRoles")),
            timeline=as_str(d.get("timeline")),
        )


FORM_FIELD_TYPES = ("text", "textarea", "file", "custom")


@dataclass
class ApplicationFormField:
    id: str
    label: str
    type: str = "text"
    value: str = ""

    @classmethod
    def from_dict(cls, data: Any, index: int = 0) -> ApplicationFormField:
        d = as_dict(data)
        kind = as_str(d.get("type"), "text").lower()
        label = as_str(d.get("label"), f"Field {index + 1}")
        return cls(
            id=as_str(d.get("id"), f"field-{index + 1}"),
            label=label,
            type=kind if kind in FORM_FIELD_TYPES else "custom",
            value=as_str(d.get("value")),
        )


@dataclass
class ParsedApplicationForm:
    basic_info: list[ApplicationFormField] = field(default_factory=list)
    custom_questions: list[ApplicationFormField] = field(default_factory=list)


@dataclass
class ParsedResumeProfile:
    name: str = ""
    bio: str = ""
    base_resume: str = ""


@dataclass
class Sampled(Generic[T]):
    """A result that may be placeholder data standing in for a failed call."""

    value: T
    is_sample: bool = False
    notice: str = ""


# ── Notifications ────────────────────────────────────────────────────────


class ToastType(str, Enum):
    SUCCESS = "success"
    ERROR = "error"
    INFO = "info"


@dataclass(frozen=True)
class ToastMessage:
    id: int
    message: str
    type: ToastType = ToastType.INFO
    created_at: float = 0.0
