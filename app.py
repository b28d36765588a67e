"""Streamlit UI for JobScout."""
from __future__ import annotations

import base64
import tempfile
from pathlib import Path

import streamlit as st

from jobscout.acquisition import default_chain
from jobscout.config import ensure_dirs
from jobscout.errors import ConfigurationError, JobScoutError
from jobscout.gateway import GenerationGateway, default_gateway
from jobscout.log import get_logger
from jobscout.models import STATUS_ORDER, Job, OfferDetails, ToastType, TrackedJob, UserProfile
from jobscout.persistence import FileBackingStore
from jobscout.postings import fetch_posting_text
from jobscout.provider import ImageInput
from jobscout.render import export_resume, resume_to_markdown, tracker_summary
from jobscout.sources import TimeFilter
from jobscout.store import EntityStore

log = get_logger(__name__)

_TOAST_ICONS = {ToastType.SUCCESS: "✅", ToastType.ERROR: "⚠️", ToastType.INFO: "ℹ️"}

_TIME_FILTERS = {
    "Any time": TimeFilter.ANY_TIME,
    "Past hour": TimeFilter.LAST_HOUR,
    "Past 24 hours": TimeFilter.LAST_24_HOURS,
    "Past week": TimeFilter.LAST_WEEK,
    "Past month": TimeFilter.LAST_MONTH,
}

_CSS = """
<style>
[data-testid="stAppViewContainer"] {
    background: linear-gradient(135deg, #e8eaf6 0%, #f3e5f5 40%, #e0f2f1 100%);
}
[data-testid="stMetric"], [data-testid="stExpander"] {
    background: rgba(255,255,255,0.6);
    border-radius: 12px;
    border: 1px solid rgba(255,255,255,0.4);
}
.sample-banner {
    padding: 0.5rem 0.75rem; background: rgba(241,196,15,0.15);
    border-left: 3px solid #f1c40f; border-radius: 6px; font-size: 0.9rem;
}
</style>
"""

# ── Session objects ──────────────────────────────────────────────────────


def _gateway() -> GenerationGateway | None:
    if "gateway" not in st.session_state:
        try:
            st.session_state["gateway"] = default_gateway()
        except ConfigurationError as exc:
            log.warning("AI tools disabled: %s", exc)
            st.session_state["gateway"] = None
            st.session_state["gateway_error"] = str(exc)
    return st.session_state["gateway"]


def _store() -> EntityStore:
    if "store" not in st.session_state:
        ensure_dirs()
        st.session_state["store"] = EntityStore(default_chain(_gateway()), backend=FileBackingStore())
    return st.session_state["store"]


def _flush_toasts(store: EntityStore) -> None:
    shown: set[int] = st.session_state.setdefault("_shown_toasts", set())
    for toast in store.toasts():
        if toast.id not in shown:
            shown.add(toast.id)
            st.toast(toast.message, icon=_TOAST_ICONS[toast.type])


def _require_gateway() -> GenerationGateway | None:
    gw = _gateway()
    if gw is None:
        st.error(
            "AI tools need a Groq API key. Set `GROQ_API_KEY` in `.env` and restart. "
            f"({st.session_state.get('gateway_error', 'not configured')})"
        )
    return gw


def _run(store: EntityStore, label: str, fn, *args, **kwargs):
    """Run a gateway call under a spinner; errors become an error toast."""
    with st.spinner(label):
        try:
            return fn(*args, **kwargs)
        except JobScoutError as exc:
            store.show_toast(exc.message, ToastType.ERROR)
            return None


def _sample_notice(notice: str) -> None:
    st.markdown(f'<div class="sample-banner">🧪 {notice}</div>', unsafe_allow_html=True)


def _open_job(job: Job) -> None:
    st.session_state["selected_job"] = job
    st.switch_page(_PAGES["job"])


def _job_card(store: EntityStore, job: Job, key: str) -> None:
    with st.container(border=True):
        c1, c2 = st.columns([5, 2])
        with c1:
            st.markdown(f"**{job.title}** · {job.company}")
            st.caption(f"📍 {job.location} · 💰 {job.salary} · 🕒 {job.posted_date}")
            if job.tags:
                st.caption(" ".join(f"`{t}`" for t in job.tags))
        with c2:
            wished = store.is_job_wishlisted(job.id)
            if st.button("💜 Saved" if wished else "🤍 Wishlist", key=f"wish-{key}", use_container_width=True):
                store.toggle_wishlist(job)
                st.rerun()
            if st.button("Details", key=f"open-{key}", use_container_width=True):
                _open_job(job)


# ── Page: Search ─────────────────────────────────────────────────────────


def page_search() -> None:
    store = _store()
    st.header("Find Jobs")

    with st.form("search"):
        c1, c2, c3 = st.columns([3, 2, 2])
        term = c1.text_input("Role or keywords", value=st.session_state.get("last_term", ""))
        location = c2.text_input("Location", value=st.session_state.get("last_location", ""))
        period = c3.selectbox("Posted", list(_TIME_FILTERS))
        submitted = st.form_submit_button("Search", type="primary", use_container_width=True)

    if submitted:
        st.session_state["last_term"], st.session_state["last_location"] = term, location
        with st.spinner("Searching job boards…"):
            store.perform_live_search(term, location, _TIME_FILTERS[period])

    if store.search_error:
        st.error(store.search_error)

    results = store.live_results
    outcome = store.last_search
    if results:
        c1, c2, c3 = st.columns([4, 2, 2])
        c1.subheader(f"{len(results)} results")
        if c2.button("Add all to wishlist", use_container_width=True):
            store.add_all_to_wishlist(results)
            st.rerun()
        if c3.button("Clear", use_container_width=True):
            store.clear_live_search()
            st.rerun()
        if outcome is not None and outcome.is_sample:
            _sample_notice("Live search is unavailable. These are demo postings, not real openings.")
        for i, job in enumerate(results):
            _job_card(store, job, f"live-{i}")
    elif not store.search_error:
        st.subheader("Recommended for you")
        for i, job in enumerate(store.catalog):
            _job_card(store, job, f"cat-{i}")


# ── Page: Job details ────────────────────────────────────────────────────


def page_job() -> None:
    store = _store()
    selected: Job | None = st.session_state.get("selected_job")
    if selected is None:
        st.info("Pick a job from **Find Jobs**, **Tracker** or **Wishlist** first.")
        return
    job = store.get_job_by_id(selected.id, fallback=selected)
    tracked = store.get_tracked_job(job.id)
    profile = store.profile

    st.header(job.title)
    st.caption(f"{job.company} · {job.location} · {job.salary} · {job.posted_date}")
    if job.source_url:
        st.markdown(f"[View original posting]({job.source_url})")

    c1, c2 = st.columns(2)
    if tracked is None:
        if c1.button("Track this job", type="primary", use_container_width=True):
            store.track_job(job)
            st.rerun()
    else:
        labels = [s.value for s in STATUS_ORDER]
        choice = c1.selectbox("Status", labels, index=labels.index(tracked.status.value))
        if choice != tracked.status.value:
            store.update_job_status(job.id, choice)
            st.rerun()
    wished = store.is_job_wishlisted(job.id)
    if c2.button("Remove from wishlist" if wished else "Add to wishlist", use_container_width=True):
        store.toggle_wishlist(job)
        st.rerun()

    with st.expander("Description", expanded=True):
        st.write(job.description)

    gw = _require_gateway()
    if gw is None:
        return

    tabs = st.tabs(["Resume", "Cover letter", "Interview", "Company", "Networking", "Offer", "Apply", "Follow-up"])

    with tabs[0]:
        if st.button("Tailor my resume"):
            resume = _run(store, "Tailoring your resume…", gw.tailor_resume, profile, job.description)
            if resume is not None:
                st.session_state[f"resume-{job.id}"] = resume
                if tracked is not None:
                    store.save_tracked_job_data(
                        job.id, structured_resume=resume, tailored_resume=resume_to_markdown(resume)
                    )
        resume = st.session_state.get(f"resume-{job.id}") or (tracked.structured_resume if tracked else None)
        if resume is not None:
            st.markdown(resume_to_markdown(resume))
            if st.button("Export as Markdown"):
                path = export_resume(resume, f"{profile.name} {job.company}")
                st.success(f"Saved → `{path}`")
        if st.button("Skills gap analysis"):
            gap = _run(store, "Comparing skills…", gw.skills_gap, profile.base_resume, job.description)
            if gap is not None:
                st.markdown("**Matching:** " + ", ".join(gap.matching_skills))
                st.markdown("**Missing:** " + ", ".join(gap.missing_skills))
                st.write(gap.suggestions)

    with tabs[1]:
        if st.button("Write cover letter"):
            letter = _run(store, "Writing your cover letter…", gw.write_cover_letter, profile, job)
            if letter and tracked is not None:
                store.save_tracked_job_data(job.id, tailored_cover_letter=letter)
            st.session_state[f"letter-{job.id}"] = letter
        letter = st.session_state.get(f"letter-{job.id}") or (tracked.tailored_cover_letter if tracked else None)
        if letter:
            st.text_area("Cover letter", letter, height=380)

    with tabs[2]:
        if st.button("Generate interview questions"):
            categories = _run(store, "Preparing questions…", gw.generate_interview_questions, job)
            st.session_state[f"questions-{job.id}"] = categories or []
        for cat in st.session_state.get(f"questions-{job.id}", []):
            st.subheader(cat.category)
            for q in cat.questions:
                st.markdown(f"- **{q.question}**  \n  _{q.tip}_")
        st.divider()
        question = st.text_input("Practice question", value="Tell me about yourself.")
        answer = st.text_area("Your answer")
        if st.button("Score my answer"):
            fb = _run(store, "Scoring…", gw.score_answer, question, answer)
            if fb is not None:
                st.write(fb.feedback)
                for s in fb.suggestions:
                    st.markdown(f"- {s}")
        if tracked is not None and st.button("Application insights"):
            insights = _run(store, "Analyzing…", gw.application_insights, job, profile.base_resume, tracked.notes)
            if insights is not None:
                store.save_tracked_job_data(job.id, application_insights=insights)
                tracked = store.get_tracked_job(job.id)
        if tracked is not None and tracked.application_insights is not None:
            ai = tracked.application_insights
            for title, items in (("Strengths", ai.strengths), ("Talking points", ai.talking_points),
                                 ("Red flags", ai.red_flags)):
                st.markdown(f"**{title}**")
                for item in items:
                    st.markdown(f"- {item}")

    with tabs[3]:
        if st.button(f"Research {job.company}"):
            brief = _run(store, "Researching…", gw.analyze_company, job.company)
            if brief is not None:
                st.markdown(f"**Mission.** {brief.mission}")
                st.markdown(f"**Recent news.** {brief.recent_news}")
                st.markdown(f"**Culture.** {brief.culture}")
                for q in brief.interview_questions:
                    st.markdown(f"- {q}")

    with tabs[4]:
        if st.button("Find contacts"):
            st.session_state[f"contacts-{job.id}"] = _run(store, "Searching…", gw.find_contacts, job.company)
        found = st.session_state.get(f"contacts-{job.id}")
        if found is not None:
            if found.is_sample:
                _sample_notice(found.notice)
            for i, contact in enumerate(found.value):
                st.markdown(f"**{contact.name}**, {contact.title}")
                if st.button("Draft outreach", key=f"outreach-{i}"):
                    msg = _run(store, "Drafting…", gw.draft_outreach, profile.name, contact, job.title)
                    if msg:
                        st.text_area("Message", msg, key=f"msg-{i}")

    with tabs[5]:
        current = (tracked.offer_details if tracked else None) or OfferDetails()
        with st.form("offer"):
            salary = st.text_input("Base salary", value=current.salary)
            bonus = st.text_input("Bonus", value=current.bonus)
            equity = st.text_input("Equity / other", value=current.equity)
            go = st.form_submit_button("Analyze offer")
        if go:
            offer = OfferDetails(salary=salary, bonus=bonus, equity=equity)
            analysis = _run(store, "Checking the market…", gw.analyze_offer, job, offer, profile.base_resume)
            if analysis is not None:
                if tracked is not None:
                    store.save_tracked_job_data(job.id, offer_details=offer)
                st.metric("Competitiveness", analysis.competitiveness)
                st.markdown(f"**Recommended range:** {analysis.recommended_range}")
                st.text_area("Script", analysis.script, height=220)

    with tabs[6]:
        if not job.source_url:
            st.info("This job has no application URL.")
        elif st.button("Prefill application"):
            form = _run(store, "Reading the application page…", gw.analyze_application_form, job, profile)
            if form is not None:
                if form.is_sample:
                    _sample_notice(form.notice)
                for f in form.value.basic_info + form.value.custom_questions:
                    if f.type == "textarea":
                        st.text_area(f.label, f.value, key=f"form-{f.id}")
                    else:
                        st.text_input(f.label, f.value, key=f"form-{f.id}")

    with tabs[7]:
        with st.form("follow-up"):
            interviewer = st.text_input("Interviewer")
            date = st.text_input("Interview date")
            notes = st.text_area("Notes", value=tracked.notes if tracked else "")
            go = st.form_submit_button("Draft follow-up")
        if go:
            if tracked is not None and notes != tracked.notes:
                store.save_tracked_job_data(job.id, notes=notes)
            email = _run(store, "Drafting…", gw.follow_up_email, profile, job, interviewer, date, notes)
            if email:
                st.text_area("Email", email, height=260)


# ── Page: Tracker ────────────────────────────────────────────────────────


def page_tracker() -> None:
    store = _store()
    st.header("Application Tracker")
    tracked: list[TrackedJob] = store.tracked_jobs

    cols = st.columns(len(STATUS_ORDER))
    for col, status in zip(cols, STATUS_ORDER):
        col.metric(status.value, sum(1 for t in tracked if t.status is status))

    if not tracked:
        st.info("No applications tracked yet.")
        return

    import pandas as pd

    df = pd.DataFrame([t.to_dict() for t in tracked])
    display_cols = ["title", "company", "status", "posted_date", "source_url"]
    st.dataframe(
        df[display_cols],
        use_container_width=True,
        column_config={"source_url": st.column_config.LinkColumn("Posting")},
        hide_index=True,
    )
    st.download_button(
        "Download summary", tracker_summary(tracked),
        file_name="tracker.md", mime="text/markdown",
    )
    for i, t in enumerate(tracked):
        if st.button(f"Open {t.title} · {t.company}", key=f"tracked-{i}"):
            _open_job(t)


# ── Page: Wishlist ───────────────────────────────────────────────────────


def page_wishlist() -> None:
    store = _store()
    st.header("Wishlist")
    jobs = store.wishlist
    if not jobs:
        st.info("Nothing here yet. Tap 🤍 on a job to save it for later.")
    for i, job in enumerate(jobs):
        _job_card(store, job, f"wl-{i}")


# ── Page: Profile ────────────────────────────────────────────────────────


def page_profile() -> None:
    store = _store()
    st.header("Profile")

    with st.sidebar:
        if store.signed_in:
            st.caption(f"Signed in as **{store.user_id}**")
            if st.button("Sign out", use_container_width=True):
                store.sign_out()
                st.rerun()
        else:
            with st.form("sign-in"):
                email = st.text_input("Email")
                if st.form_submit_button("Sign in") and email.strip():
                    store.sign_in(email.strip(), {"email": email.strip()})
                    st.rerun()

    profile = store.profile
    gw = _gateway()
    uploaded = st.file_uploader("Autofill from resume (PDF, DOCX, TXT)", type=["pdf", "docx", "txt", "md"])
    if uploaded and gw is not None and st.button("Read resume"):
        with tempfile.TemporaryDirectory() as tmp:
            dest = Path(tmp) / uploaded.name
            dest.write_bytes(uploaded.getvalue())
            parsed = _run(store, "Reading your resume…", gw.parse_resume_file, dest)
        if parsed is not None:
            profile = UserProfile(**{**profile.to_dict(), "name": parsed.name or profile.name,
                                     "bio": parsed.bio or profile.bio, "base_resume": parsed.base_resume})
            store.update_user_profile(profile)

    with st.form("profile"):
        c1, c2, c3 = st.columns(3)
        name = c1.text_input("Name", profile.name)
        email = c2.text_input("Email", profile.email)
        phone = c3.text_input("Phone", profile.phone)
        c1, c2, c3 = st.columns(3)
        linkedin = c1.text_input("LinkedIn", profile.linkedin_url or "")
        github = c2.text_input("GitHub", profile.github_url or "")
        portfolio = c3.text_input("Portfolio", profile.portfolio_url or "")
        bio = st.text_area("Bio", profile.bio)
        base_resume = st.text_area("Base resume", profile.base_resume, height=320)
        if st.form_submit_button("Save profile", type="primary"):
            store.update_user_profile(UserProfile(
                name=name, email=email, phone=phone, bio=bio, base_resume=base_resume,
                profile_picture_url=profile.profile_picture_url, cover_photo_url=profile.cover_photo_url,
                linkedin_url=linkedin or None, github_url=github or None, portfolio_url=portfolio or None,
            ))
            st.rerun()


# ── Page: Import & career ────────────────────────────────────────────────


def page_tools() -> None:
    store = _store()
    st.header("Tools")
    gw = _require_gateway()
    if gw is None:
        return

    st.subheader("Import a job posting")
    url = st.text_input("Posting URL (optional)")
    text = st.text_area("…or paste the description")
    shot = st.file_uploader("…or a screenshot", type=["png", "jpg", "jpeg", "webp"])
    if st.button("Import", type="primary"):
        if url.strip():
            try:
                text = fetch_posting_text(url)
            except JobScoutError as exc:
                store.show_toast(exc.message, ToastType.ERROR)
                text = ""
        image = None
        if shot is not None:
            image = ImageInput(mime_type=shot.type or "image/png", data=base64.b64encode(shot.getvalue()).decode())
        if text or image is not None:
            job = _run(store, "Reading the posting…", gw.parse_job_posting, text=text, image=image)
            if job is not None:
                if url.strip() and not job.source_url:
                    job.source_url = url.strip()
                store.track_job(job)

    st.divider()
    st.subheader("Career path planner")
    c1, c2 = st.columns(2)
    current = c1.text_input("Current role")
    goal = c2.text_input("Goal role")
    if st.button("Plan my path"):
        plan = _run(store, "Planning…", gw.career_path, current, goal)
        if plan is not None:
            st.markdown(f"**Timeline:** {plan.timeline}")
            for title, items in (("Skills to develop", plan.key_skills_to_develop),
                                 ("Project ideas", plan.project_ideas), ("Bridge roles", plan.bridge_roles)):
                st.markdown(f"**{title}**")
                for item in items:
                    st.markdown(f"- {item}")


# ── Main ─────────────────────────────────────────────────────────────────


def _wrap(page):
    def run() -> None:
        st.markdown(_CSS, unsafe_allow_html=True)
        page()
        _flush_toasts(_store())

    run.__name__ = page.__name__
    return run


_PAGES = {
    "search": st.Page(_wrap(page_search), title="Find Jobs", icon="🔎", url_path="search", default=True),
    "job": st.Page(_wrap(page_job), title="Job", icon="📄", url_path="job"),
    "tracker": st.Page(_wrap(page_tracker), title="Tracker", icon="📋", url_path="tracker"),
    "wishlist": st.Page(_wrap(page_wishlist), title="Wishlist", icon="💜", url_path="wishlist"),
    "tools": st.Page(_wrap(page_tools), title="Tools", icon="🧰", url_path="tools"),
    "profile": st.Page(_wrap(page_profile), title="Profile", icon="👤", url_path="profile"),
}

nav = st.navigation(list(_PAGES.values()))
nav.run()
