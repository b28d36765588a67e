from __future__ import annotations

from conftest import make_job

from jobscout.models import (
    ApplicationInsights,
    ApplicationStatus,
    OfferDetails,
    SkillGroup,
    StructuredResume,
    TrackedJob,
    UserProfile,
)
from jobscout.persistence import FileBackingStore


def test_missing_user_loads_none(tmp_path) -> None:
    backend = FileBackingStore(tmp_path)
    assert backend.load_profile("nobody") is None
    assert backend.load_tracked("nobody") is None
    assert backend.load_wishlist("nobody") is None


def test_profile_round_trip(tmp_path) -> None:
    backend = FileBackingStore(tmp_path)
    profile = UserProfile(name="Pat", email="pat@example.com", base_resume="line 1\nline 2: ₹ ok")
    backend.save_profile("pat@example.com", profile)
    assert backend.load_profile("pat@example.com") == profile
    [user_dir] = tmp_path.iterdir()
    assert user_dir.name.startswith("pat@example.com-")
    assert (user_dir / "profile.yaml").exists()


def test_tracked_jobs_keep_nested_fields(tmp_path) -> None:
    backend = FileBackingStore(tmp_path)
    job = TrackedJob.from_job(make_job("t1"), ApplicationStatus.OFFER)
    job.notes = "Negotiating, call Tuesday"
    job.offer_details = OfferDetails(salary="$150,000", bonus="10%")
    job.application_insights = ApplicationInsights(strengths=["APIs"], red_flags=["No Go"])
    job.structured_resume = StructuredResume(summary="Engineer", skills=[SkillGroup("Languages", "Python, Go")])
    backend.save_tracked("pat", [job, TrackedJob.from_job(make_job("t2"))])

    loaded = backend.load_tracked("pat")
    assert [t.id for t in loaded] == ["t1", "t2"]
    first = loaded[0]
    assert first.status is ApplicationStatus.OFFER
    assert first.notes == "Negotiating, call Tuesday"
    assert first.tags == ["Python"]
    assert first.offer_details == job.offer_details
    assert first.application_insights == job.application_insights
    assert first.structured_resume.skills[0].items == "Python, Go"
    assert loaded[1].offer_details is None


def test_wishlist_round_trip_marks_jobs(tmp_path) -> None:
    backend = FileBackingStore(tmp_path)
    backend.save_wishlist("pat", [make_job("w1"), make_job("w2")])
    loaded = backend.load_wishlist("pat")
    assert [j.id for j in loaded] == ["w1", "w2"]
    assert all(j.is_wishlisted for j in loaded)
    assert loaded[0].source_url == "https://jobs.example/w1"


def test_users_are_isolated(tmp_path) -> None:
    backend = FileBackingStore(tmp_path)
    backend.save_wishlist("a", [make_job("w1")])
    assert backend.load_wishlist("b") is None


def test_ids_that_sanitise_alike_stay_separate(tmp_path) -> None:
    backend = FileBackingStore(tmp_path)
    backend.save_wishlist("a+b@x", [make_job("w1")])
    backend.save_wishlist("a_b@x", [make_job("w2")])
    assert [j.id for j in backend.load_wishlist("a+b@x")] == ["w1"]
    assert [j.id for j in backend.load_wishlist("a_b@x")] == ["w2"]
    assert len(list(tmp_path.iterdir())) == 2


def test_user_id_cannot_escape_root(tmp_path) -> None:
    backend = FileBackingStore(tmp_path / "users")
    backend.save_wishlist("../../etc", [make_job("w1")])
    assert not (tmp_path / "etc").exists()
    assert backend.load_wishlist("../../etc")[0].id == "w1"
