from __future__ import annotations

import random

import pytest

from conftest import FailingSource, ListSource, make_job

from jobscout.acquisition import AcquisitionChain, SearchStage, default_chain
from jobscout.errors import ErrorKind, JobScoutError, unavailable_error
from jobscout.sources import DemoSource


def test_blank_query_is_rejected_before_any_source() -> None:
    board, ai = ListSource([make_job("1")]), ListSource([make_job("ai")])
    chain = AcquisitionChain([board], ai, DemoSource())
    with pytest.raises(JobScoutError) as info:
        chain.search("  ", "")
    assert info.value.kind is ErrorKind.VALIDATION
    assert board.calls == 0
    assert ai.calls == 0


def test_scraper_results_skip_later_stages() -> None:
    ai = ListSource([make_job("ai")])
    chain = AcquisitionChain([ListSource([make_job("a")]), ListSource([make_job("b")])], ai, DemoSource())
    outcome = chain.search("python", "")
    assert outcome.stage is SearchStage.SCRAPER
    assert sorted(j.id for j in outcome.jobs) == ["a", "b"]
    assert not outcome.is_sample
    assert ai.calls == 0


def test_failing_board_does_not_sink_the_others() -> None:
    chain = AcquisitionChain([FailingSource(RuntimeError("boom")), ListSource([make_job("a")])], None, DemoSource())
    assert [j.id for j in chain.search("python", "").jobs] == ["a"]


def test_ai_stage_when_scraper_empty() -> None:
    ai = ListSource([make_job("ai-0")])
    outcome = AcquisitionChain([ListSource([])], ai, DemoSource()).search("python", "")
    assert outcome.stage is SearchStage.AI_SEARCH
    assert [j.id for j in outcome.jobs] == ["ai-0"]
    assert ai.calls == 1


@pytest.mark.parametrize("ai", [
    ListSource([]),
    FailingSource(unavailable_error("searching for jobs")),
    FailingSource(ValueError("unexpected")),
])
def test_demo_stage_when_everything_else_fails(ai) -> None:
    outcome = AcquisitionChain([ListSource([])], ai, DemoSource()).search("python", "Pune")
    assert outcome.stage is SearchStage.DEMO
    assert outcome.is_sample
    assert len(outcome.jobs) == 2
    assert all("python" in j.title for j in outcome.jobs)


def test_shuffle_keeps_every_job() -> None:
    boards = [ListSource([make_job(f"{n}-{i}") for i in range(4)]) for n in "abc"]
    chain = AcquisitionChain(boards, None, DemoSource(), rng=random.Random(7))
    ids = [j.id for j in chain.search("python", "").jobs]
    assert sorted(ids) == sorted(f"{n}-{i}" for n in "abc" for i in range(4))


def test_default_chain_without_gateway_uses_synthetic_boards() -> None:
    chain = default_chain()
    assert chain.ai_source is None
    outcome = chain.search("data engineer", "")
    assert outcome.stage is SearchStage.SCRAPER
    assert len(outcome.jobs) == 15
