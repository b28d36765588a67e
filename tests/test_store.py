from __future__ import annotations

import threading
from dataclasses import replace

from conftest import FailingBackend, ListSource, MemoryBackend, make_job, make_store

from jobscout.acquisition import SEARCH_REQUIRED_MESSAGE, AcquisitionChain, SearchStage
from jobscout.errors import validation_error
from jobscout.models import ApplicationStatus, OfferDetails, ToastType, UserProfile
from jobscout.sources.base import JobSource, TimeFilter
from jobscout.sources.demo import DemoSource


def _messages(store) -> list[tuple[str, ToastType]]:
    return [(t.message, t.type) for t in store.toasts()]


def test_seeded_collections() -> None:
    store = make_store()
    assert [j.id for j in store.catalog] == ["1", "2", "3", "4"]
    assert [t.id for t in store.tracked_jobs] == ["1", "3", "4"]
    assert store.tracked_jobs[0].status is ApplicationStatus.INTERVIEWING
    assert [j.id for j in store.wishlist] == ["3"]
    assert store.is_job_wishlisted("3")
    assert not store.signed_in


def test_read_surface_returns_copies(store) -> None:
    store.tracked_jobs.clear()
    store.wishlist.clear()
    assert len(store.tracked_jobs) == 3
    assert len(store.wishlist) == 1


def test_reads_cannot_mutate_stored_records(store) -> None:
    tracked = store.get_tracked_job("1")
    tracked.status = ApplicationStatus.REJECTED
    tracked.tags.append("leaked")
    store.tracked_jobs[0].notes = "leaked"
    store.get_job_by_id("1").title = "leaked"
    store.catalog[0].tags.clear()

    fresh = store.get_tracked_job("1")
    assert fresh.status is ApplicationStatus.INTERVIEWING
    assert "leaked" not in fresh.tags
    assert fresh.notes != "leaked"
    assert fresh.title != "leaked"
    assert store.catalog[0].tags


def test_get_job_by_id_prefers_tracked_copy(store) -> None:
    store.save_tracked_job_data("1", notes="recruiter call on Monday")
    job = store.get_job_by_id("1")
    assert getattr(job, "notes", None) == "recruiter call on Monday"


def test_get_job_by_id_checks_live_results_then_fallback(store) -> None:
    store.perform_live_search("python", "")
    assert store.get_job_by_id("live-2").title == "Designer"

    fallback = make_job("from-nav")
    assert store.get_job_by_id("missing", fallback=fallback) is fallback
    assert store.get_job_by_id("missing") is None


def test_track_job_is_idempotent(store) -> None:
    job = make_job("new")
    assert store.track_job(job) is True
    assert store.track_job(job) is False

    tracked = store.tracked_jobs
    assert tracked[0].id == "new"
    assert tracked[0].status is ApplicationStatus.SAVED
    assert tracked[0].notes == ""
    assert sum(1 for t in tracked if t.id == "new") == 1
    assert _messages(store)[0] == ("Job saved to tracker!", ToastType.SUCCESS)
    assert _messages(store)[1][1] is ToastType.INFO


def test_update_job_status_overwrites_without_transition_rules(store) -> None:
    assert store.update_job_status("1", ApplicationStatus.REJECTED)
    assert store.update_job_status("1", "Saved")
    assert store.get_tracked_job("1").status is ApplicationStatus.SAVED


def test_update_job_status_changes_only_the_status(store) -> None:
    before = store.get_tracked_job("3")
    assert before.status is ApplicationStatus.APPLIED
    assert store.update_job_status("3", ApplicationStatus.OFFER)
    after = store.get_tracked_job("3")
    assert after.status is ApplicationStatus.OFFER
    assert replace(after, status=ApplicationStatus.APPLIED) == before


def test_update_job_status_unknown_id_is_an_error_toast(store) -> None:
    before = store.tracked_jobs
    assert store.update_job_status("nope", ApplicationStatus.OFFER) is False
    assert store.tracked_jobs == before
    assert _messages(store)[-1][1] is ToastType.ERROR


def test_save_tracked_job_data_never_touches_id_or_status(store) -> None:
    assert store.save_tracked_job_data("1", status="Offer") is False
    assert store.save_tracked_job_data("1", id="hijack") is False
    job = store.get_tracked_job("1")
    assert job.status is ApplicationStatus.INTERVIEWING
    assert job.id == "1"


def test_save_tracked_job_data_merges_and_parses_nested(store) -> None:
    assert store.save_tracked_job_data(
        "4",
        tailored_cover_letter="Dear team",
        offer_details={"salary": "$140k", "bonus": "10%"},
    )
    job = store.get_tracked_job("4")
    assert job.tailored_cover_letter == "Dear team"
    assert job.offer_details == OfferDetails(salary="$140k", bonus="10%")
    assert job.notes == ""

    store.save_tracked_job_data("4", notes="sent")
    assert store.get_tracked_job("4").tailored_cover_letter == "Dear team"


def test_toggle_wishlist_round_trip(store) -> None:
    job = make_job("w1")
    assert store.toggle_wishlist(job) is True
    assert store.is_job_wishlisted("w1")
    assert store.wishlist[-1].is_wishlisted
    assert store.toggle_wishlist(job) is False
    assert not store.is_job_wishlisted("w1")
    assert [m for m, _ in _messages(store)] == ["Added to wishlist", "Removed from wishlist"]


def test_toggle_wishlist_updates_live_copy(store) -> None:
    store.perform_live_search("python", "")
    store.toggle_wishlist(store.live_results[0])
    flagged = {j.id: j.is_wishlisted for j in store.live_results}
    assert sum(flagged.values()) == 1
    assert all(store.is_job_wishlisted(i) == f for i, f in flagged.items())


def test_add_all_to_wishlist_counts_only_new(store) -> None:
    store.perform_live_search("python", "")
    live = store.live_results
    store.toggle_wishlist(live[0])

    assert store.add_all_to_wishlist(live) == 1
    assert store.add_all_to_wishlist(live) == 0
    messages = [m for m, _ in _messages(store)]
    assert "Added 1 jobs to wishlist!" in messages
    assert messages[-1] == "All jobs are already in your wishlist."


def test_add_all_to_wishlist_adds_exactly_the_missing_jobs() -> None:
    store = make_store([make_job(i) for i in ("a", "b", "c", "d", "e")])
    store.perform_live_search("python", "")
    live = store.live_results
    store.toggle_wishlist(live[0])
    store.toggle_wishlist(live[1])
    size = len(store.wishlist)

    assert store.add_all_to_wishlist(live) == 3
    assert len(store.wishlist) == size + 3
    assert all(store.is_job_wishlisted(j.id) for j in live)


def test_add_all_to_wishlist_flags_only_given_jobs() -> None:
    store = make_store([make_job("a"), make_job("b"), make_job("c")])
    store.perform_live_search("python", "")
    target = [j for j in store.live_results if j.id == "a"]
    store.add_all_to_wishlist(target)
    assert {j.id for j in store.live_results if j.is_wishlisted} == {"a"}


def test_search_requires_term_or_location(store) -> None:
    assert store.perform_live_search("  ", "") is None
    assert store.search_error == SEARCH_REQUIRED_MESSAGE
    assert not store.is_searching
    assert _messages(store) == [(SEARCH_REQUIRED_MESSAGE, ToastType.ERROR)]


def test_search_syncs_wishlist_flags(store) -> None:
    store.toggle_wishlist(make_job("live-2"))
    outcome = store.perform_live_search("", "Berlin")
    assert outcome.stage is SearchStage.SCRAPER
    flags = {j.id: j.is_wishlisted for j in store.live_results}
    assert flags == {"live-1": False, "live-2": True}
    assert store.last_search == outcome
    assert _messages(store)[-1] == ("Found 2 jobs.", ToastType.SUCCESS)


def test_search_falls_back_to_demo_and_says_so() -> None:
    store = make_store([])
    outcome = store.perform_live_search("rust", "Remote")
    assert outcome.is_sample
    assert len(store.live_results) == 2
    assert _messages(store)[-1][1] is ToastType.INFO


def test_search_error_settles_state() -> None:
    class Exploding(AcquisitionChain):
        def search(self, term, location, time_filter=TimeFilter.ANY_TIME):
            raise RuntimeError("boom")

    store = make_store(chain=Exploding([], None, DemoSource()))
    assert store.perform_live_search("python", "") is None
    assert not store.is_searching
    assert store.search_error
    assert _messages(store)[-1][1] is ToastType.ERROR


def test_search_validation_error_from_chain_is_surfaced() -> None:
    class Strict(AcquisitionChain):
        def search(self, term, location, time_filter=TimeFilter.ANY_TIME):
            raise validation_error("bad query")

    store = make_store(chain=Strict([], None, DemoSource()))
    store.perform_live_search("python", "")
    assert store.search_error == "bad query"


def test_clear_live_search(store) -> None:
    store.perform_live_search("python", "")
    store.clear_live_search()
    assert store.live_results == []
    assert store.search_error is None
    assert store.last_search is None


def test_wishlist_toggle_while_search_in_flight() -> None:
    started, release = threading.Event(), threading.Event()

    class Slow(JobSource):
        name = "slow"

        def search(self, term, location, time_filter=TimeFilter.ANY_TIME):
            started.set()
            release.wait(5)
            return [make_job("slow-1")]

    store = make_store(chain=AcquisitionChain([Slow()], None, DemoSource()))
    worker = threading.Thread(target=store.perform_live_search, args=("python", ""))
    worker.start()
    assert started.wait(5)
    assert store.is_searching

    assert store.toggle_wishlist(make_job("other")) is True
    assert store.track_job(make_job("other"))

    release.set()
    worker.join(5)
    assert not store.is_searching
    assert store.is_job_wishlisted("other")
    assert [j.id for j in store.live_results] == ["slow-1"]


def test_scraper_results_skip_ai_stage() -> None:
    ai = ListSource([make_job("ai-1")], name="ai")
    chain = AcquisitionChain([ListSource([make_job("s-1")])], ai, DemoSource())
    store = make_store(chain=chain)
    store.perform_live_search("python", "")
    assert ai.calls == 0


def test_update_user_profile_replaces_wholesale(store) -> None:
    store.update_user_profile(UserProfile(name="Sam"))
    assert store.profile.name == "Sam"
    assert store.profile.base_resume == ""
    assert _messages(store)[-1][1] is ToastType.SUCCESS


def test_backend_write_through() -> None:
    backend = MemoryBackend()
    store = make_store(backend=backend)
    store.sign_in("pat", {"name": "Pat Q"})
    store.track_job(make_job("n1"))
    store.toggle_wishlist(make_job("n1"))

    assert backend.tracked["pat"][0].id == "n1"
    assert [j.id for j in backend.wishlists["pat"]] == ["3", "n1"]
    assert store.profile.name == "Pat Q"


def test_backend_failure_leaves_state_untouched() -> None:
    store = make_store(backend=FailingBackend())
    store.sign_in("pat")
    tracked, wishlist, profile = store.tracked_jobs, store.wishlist, store.profile

    assert store.track_job(make_job("n1")) is False
    assert store.toggle_wishlist(make_job("n1")) is False
    assert store.update_job_status("1", ApplicationStatus.OFFER) is False
    assert store.update_user_profile(UserProfile(name="X")) is False

    assert store.tracked_jobs == tracked
    assert store.wishlist == wishlist
    assert store.profile == profile
    errors = [m for m, t in _messages(store) if t is ToastType.ERROR]
    assert len(errors) == 4


def test_without_backend_mutations_are_local() -> None:
    store = make_store()
    store.sign_in("pat")
    assert store.track_job(make_job("n1"))
    assert store.get_tracked_job("n1") is not None


def test_sign_in_loads_stored_collections() -> None:
    backend = MemoryBackend()
    backend.profiles["pat"] = UserProfile(name="Stored Pat")
    backend.tracked["pat"] = []
    backend.wishlists["pat"] = [make_job("saved-1")]
    store = make_store(backend=backend)

    store.sign_in("pat", {"name": "Claim Name"})
    assert store.profile.name == "Stored Pat"
    assert store.tracked_jobs == []
    assert store.is_job_wishlisted("saved-1")
    assert store.user_id == "pat"


def test_sign_out_resets_everything(store) -> None:
    store.sign_in("pat")
    store.track_job(make_job("n1"))
    store.perform_live_search("python", "")
    store.sign_out()

    assert not store.signed_in
    assert store.get_tracked_job("n1") is None
    assert store.live_results == []
    assert store.toasts() == []
    assert store.profile.name == "Pat Lee"


def test_dismiss_toast(store) -> None:
    toast = store.show_toast("hello")
    assert store.dismiss_toast(toast.id)
    assert store.toasts() == []
