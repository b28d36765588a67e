"""Generation gateway: every AI-backed operation the app offers.

Each operation builds a prompt, calls the provider once and turns the reply
into a typed result. All provider failures come out as ``JobScoutError``.
``find_contacts`` and ``analyze_application_form`` degrade to sample data
instead of raising, and say so on the returned ``Sampled``.
"""
from __future__ import annotations

import time
from pathlib import Path
from typing import Any

from jobscout import prompts, seed
from jobscout.errors import (
    ErrorKind,
    JobScoutError,
    blocked_error,
    empty_error,
    parse_error,
    unavailable_error,
    validation_error,
)
from jobscout.log import get_logger
from jobscout.models import (
    ApplicationFormField,
    ApplicationInsights,
    CareerPathPlan,
    CompanyBriefing,
    InterviewFeedback,
    Job,
    NegotiationAnalysis,
    OfferDetails,
    ParsedApplicationForm,
    ParsedResumeProfile,
    PotentialContact,
    QuestionCategory,
    Sampled,
    SkillAnalysis,
    StructuredResume,
    UserProfile,
)
from jobscout.parsing import as_dict, as_list, as_str, parse_json_response
from jobscout.provider import GroqProvider, ImageInput, ProviderBlocked, ProviderUnavailable, TextProvider
from jobscout.resume_parser import extract_text

log = get_logger(__name__)

CONTACTS_FALLBACK_NOTICE = "Could not find live contacts. Displaying sample data."
FORM_FALLBACK_NOTICE = "Could not analyze the application page. Displaying a sample form prefilled from your profile."
RESUME_EXCERPT_CHARS = 500


def _now_ms() -> int:
    return int(time.time() * 1000)


class GenerationGateway:
    def __init__(self, provider: TextProvider) -> None:
        self.provider = provider

    # ── Plumbing ────────────────────────────────────────────────────────

    def _generate(
        self,
        prompt: str,
        what: str,
        *,
        search: bool = False,
        image: ImageInput | None = None,
        json_mode: bool = False,
    ) -> str:
        try:
            completion = self.provider.complete(prompt, search=search, image=image, json_mode=json_mode)
        except ProviderBlocked as exc:
            log.warning("Provider blocked %s: %s", what, exc.reason)
            raise blocked_error(exc.reason, what) from exc
        except ProviderUnavailable as exc:
            log.error("Provider unavailable while %s: %s", what, exc)
            raise unavailable_error(what, detail=str(exc)) from exc
        if not completion.text.strip():
            log.warning("Empty completion while %s (finish_reason=%s)", what, completion.finish_reason)
            raise empty_error(what)
        return completion.text.strip()

    def _generate_json(self, prompt: str, what: str, **kwargs: Any) -> Any:
        return parse_json_response(self._generate(prompt, what, **kwargs), what)

    def _generate_object(self, prompt: str, what: str, **kwargs: Any) -> dict[str, Any]:
        data = self._generate_json(prompt, what, **kwargs)
        if not isinstance(data, dict):
            log.debug("Expected an object while %s, got %r", what, data)
            raise parse_error(what, detail=f"expected an object, got {type(data).__name__}")
        return data

    # ── Résumé and letters ──────────────────────────────────────────────

    def tailor_resume(self, profile: UserProfile, job_description: str) -> StructuredResume:
        what = "tailoring your resume"
        prompt = prompts.TAILOR_RESUME.format(
            name=profile.name,
            email=profile.email,
            phone=profile.phone,
            linkedin=profile.linkedin_url or "N/A",
            github=profile.github_url or "N/A",
            portfolio=profile.portfolio_url or "N/A",
            base_resume=profile.base_resume,
            job_description=job_description,
        )
        data = self._generate_object(prompt, what, json_mode=True)
        resume = StructuredResume.from_dict(data)
        log.info("Tailored resume: %d experience entries, %d skill groups",
                 len(resume.experience), len(resume.skills))
        return resume

    def write_cover_letter(self, profile: UserProfile, job: Job) -> str:
        prompt = prompts.COVER_LETTER.format(
            name=profile.name,
            email=profile.email,
            phone=profile.phone,
            bio=profile.bio,
            title=job.title,
            company=job.company,
            description=job.description,
        )
        return self._generate(prompt, "writing your cover letter")

    def follow_up_email(
        self,
        profile: UserProfile,
        job: Job,
        interviewer: str,
        interview_date: str,
        notes: str = "",
    ) -> str:
        prompt = prompts.FOLLOW_UP_EMAIL.format(
            name=profile.name,
            title=job.title,
            company=job.company,
            interviewer=interviewer or "the hiring team",
            interview_date=interview_date or "recently",
            notes=notes or "None",
        )
        return self._generate(prompt, "drafting the follow-up email")

    # ── Interview preparation ───────────────────────────────────────────

    def generate_interview_questions(self, job: Job) -> list[QuestionCategory]:
        what = "generating interview questions"
        prompt = prompts.INTERVIEW_QUESTIONS.format(
            title=job.title, company=job.company, description=job.description
        )
        data = self._generate_json(prompt, what)
        # some models wrap the array in {"categories": [...]}
        if isinstance(data, dict):
            data = next((v for v in data.values() if isinstance(v, list)), None)
        if not isinstance(data, list):
            raise parse_error(what, detail="expected a list of categories")
        return [c for c in map(QuestionCategory.from_dict, data) if c.questions]

    def score_answer(self, question: str, answer: str, *, with_delivery: bool = False) -> InterviewFeedback:
        if not answer or not answer.strip():
            raise validation_error("Write or record an answer before asking for feedback.")
        template = prompts.SCORE_ANSWER_WITH_DELIVERY if with_delivery else prompts.SCORE_ANSWER
        data = self._generate_object(
            template.format(question=question, answer=answer.strip()),
            "scoring your answer",
            json_mode=True,
        )
        return InterviewFeedback.from_dict(data)

    def analyze_company(self, company: str) -> CompanyBriefing:
        what = f"researching {company}"
        data = self._generate_object(prompts.COMPANY_BRIEFING.format(company=company), what, search=True)
        return CompanyBriefing.from_dict(data)

    def application_insights(self, job: Job, resume: str, notes: str = "") -> ApplicationInsights:
        prompt = prompts.APPLICATION_INSIGHTS.format(
            title=job.title,
            company=job.company,
            description=job.description,
            resume=resume,
            notes=notes or "No notes provided.",
        )
        data = self._generate_object(prompt, "preparing application insights", json_mode=True)
        return ApplicationInsights.from_dict(data)

    def skills_gap(self, resume: str, job_description: str) -> SkillAnalysis:
        prompt = prompts.SKILLS_GAP.format(resume=resume, job_description=job_description)
        data = self._generate_object(prompt, "analyzing your skills gap", json_mode=True)
        return SkillAnalysis.from_dict(data)

    # ── Offers, networking and careers ──────────────────────────────────

    def analyze_offer(self, job: Job, offer: OfferDetails, resume: str) -> NegotiationAnalysis:
        if not offer.salary:
            raise validation_error("Enter at least the base salary of the offer.")
        prompt = prompts.ANALYZE_OFFER.format(
            title=job.title,
            company=job.company,
            location=job.location,
            resume_excerpt=resume[:RESUME_EXCERPT_CHARS],
            salary=offer.salary,
            bonus=offer.bonus or "None",
            equity=offer.equity or "None",
        )
        data = self._generate_object(prompt, "analyzing the offer", search=True)
        return NegotiationAnalysis.from_dict(data)

    def find_contacts(self, company: str) -> Sampled[list[PotentialContact]]:
        """Live contacts at ``company``, or the sample contacts when the
        lookup fails or finds nobody."""
        try:
            data = self._generate_json(
                prompts.FIND_CONTACTS.format(company=company),
                f"finding contacts at {company}",
                search=True,
            )
        except JobScoutError as exc:
            log.warning("Contact search for %s failed (%s), using sample contacts", company, exc.kind.value)
            return Sampled(seed.sample_contacts(), is_sample=True, notice=CONTACTS_FALLBACK_NOTICE)

        if isinstance(data, dict):
            data = data.get("contacts")
        contacts = [PotentialContact.from_dict(c) for c in as_list(data) if isinstance(c, dict)]
        if not contacts:
            log.info("No live contacts found for %s, using sample contacts", company)
            return Sampled(seed.sample_contacts(), is_sample=True, notice=CONTACTS_FALLBACK_NOTICE)
        return Sampled(contacts)

    def draft_outreach(self, user_name: str, contact: PotentialContact, job_title: str) -> str:
        prompt = prompts.OUTREACH_MESSAGE.format(
            user_name=user_name,
            contact_name=contact.name,
            contact_title=contact.title,
            job_title=job_title,
        )
        return self._generate(prompt, f"drafting a message to {contact.name}")

    def career_path(self, current_role: str, goal_role: str) -> CareerPathPlan:
        if not current_role.strip() or not goal_role.strip():
            raise validation_error("Enter both your current role and your goal role.")
        prompt = prompts.CAREER_PATH.format(current_role=current_role.strip(), goal_role=goal_role.strip())
        data = self._generate_object(prompt, "planning your career path", search=True)
        plan = CareerPathPlan.from_dict(data)
        plan.current_role = plan.current_role or current_role.strip()
        plan.goal_role = plan.goal_role or goal_role.strip()
        return plan

    # ── Importing ───────────────────────────────────────────────────────

    def parse_job_posting(self, text: str | None = None, image: ImageInput | None = None) -> Job:
        """Extract a job from pasted text and/or a screenshot."""
        text = (text or "").strip()
        if not text and image is None:
            raise validation_error("Paste the job description or attach a screenshot of it.")
        job_text = f"\nJob posting text:\n---\n{text}\n---" if text else ""
        what = "importing the job posting"
        data = self._generate_json(
            prompts.PARSE_JOB_POSTING.format(job_text=job_text),
            what,
            image=image,
            json_mode=True,
        )
        if isinstance(data, list) and data:
            data = data[0]
        if not isinstance(data, dict):
            raise parse_error(what, detail="expected an object")
        data.pop("id", None)
        job = Job.from_dict(data, default_id=f"imported-{_now_ms()}")
        if job.posted_date == "Recently":
            job.posted_date = "Today"
        log.info("Imported posting: %s at %s", job.title, job.company)
        return job

    def parse_resume_file(self, path: Path) -> ParsedResumeProfile:
        resume_text = extract_text(Path(path))
        what = "reading your resume"
        data = self._generate_object(prompts.PARSE_RESUME.format(resume_text=resume_text), what, json_mode=True)
        return ParsedResumeProfile(
            name=as_str(data.get("name")),
            bio=as_str(data.get("bio")),
            base_resume=as_str(data.get("baseResume") or data.get("base_resume"), resume_text),
        )

    def analyze_application_form(self, job: Job, profile: UserProfile) -> Sampled[ParsedApplicationForm]:
        """Prefill the job's application form; falls back to a sample form."""
        if not job.source_url:
            raise validation_error("This job has no application URL to analyze.")
        prompt = prompts.ANALYZE_APPLICATION_FORM.format(
            url=job.source_url,
            name=profile.name,
            email=profile.email,
            phone=profile.phone,
            linkedin=profile.linkedin_url or "N/A",
            github=profile.github_url or "N/A",
            portfolio=profile.portfolio_url or "N/A",
            bio=profile.bio,
            title=job.title,
            company=job.company,
        )
        try:
            data = self._generate_json(prompt, "analyzing the application form", search=True)
            form = _form_from_dict(data)
        except JobScoutError as exc:
            log.warning("Application form analysis for %s failed (%s), using sample form",
                        job.source_url, exc.kind.value)
            return Sampled(seed.placeholder_form(job, profile), is_sample=True, notice=FORM_FALLBACK_NOTICE)
        return Sampled(form)

    # ── Search ──────────────────────────────────────────────────────────

    def search_jobs(self, term: str, location: str) -> list[Job]:
        what = "searching for jobs"
        prompt = prompts.SEARCH_JOBS.format(term=term or "any role", location=location or "anywhere")
        data = self._generate_json(prompt, what, search=True)
        if isinstance(data, dict):
            data = data.get("jobs")
        if not isinstance(data, list):
            raise parse_error(what, detail="expected a list of jobs")
        stamp = _now_ms()
        jobs = [
            Job.from_dict(item, default_id=f"ai-{i}-{stamp}")
            for i, item in enumerate(data)
            if isinstance(item, dict)
        ]
        log.info("AI search returned %d job(s) for %r in %r", len(jobs), term, location)
        return jobs


def _form_from_dict(data: Any) -> ParsedApplicationForm:
    d = as_dict(data)
    basic, custom = d.get("basicInfo", d.get("basic_info")), d.get("customQuestions", d.get("custom_questions"))
    if not isinstance(basic, list) or not isinstance(custom, list):
        raise JobScoutError(
            ErrorKind.PARSE,
            "The application form analysis came back in an unexpected shape.",
            detail="basicInfo and customQuestions must be arrays",
        )
    return ParsedApplicationForm(
        basic_info=[ApplicationFormField.from_dict(f, i) for i, f in enumerate(basic)],
        custom_questions=[ApplicationFormField.from_dict(f, i) for i, f in enumerate(custom)],
    )


def default_gateway() -> GenerationGateway:
    """Gateway over the configured Groq provider; raises ConfigurationError
    when no API key is set."""
    return GenerationGateway(GroqProvider())
