# File: tests/e2e/test_batch.py

import pytest
from pathlib import Path

from streamsplit.core.common.enums import JobStatus, RunState
from streamsplit.core.common.errors import ExtractionError, ProbeError
from streamsplit.features.batch.service.orchestrator import BatchDemuxer
from streamsplit.features.correlation.domain.models import CorrelationResult, VideoPairing
from streamsplit.features.demux_plan.domain.models import DemuxJob
from streamsplit.features.demux_plan.service.builder import DemuxPlanBuilder
from streamsplit.features.extraction.domain.interfaces import IStreamCopier
from streamsplit.features.extraction.service.executor import PlanExecutor
from streamsplit.features.language_suffix.service.resolver import LanguageSuffixResolver
from streamsplit.features.ledger.data.repository import SqlLedgerRepository
from streamsplit.features.stream_catalog.domain.interfaces import IStreamProber


class FakeProber(IStreamProber):
    """Returns the scenario catalog, or raises for the paths listed in failures."""

    def __init__(self, scenario_at, failures=None):
        self.scenario_at = scenario_at
        self.failures = failures or {}

    def probe(self, media_path: Path):
        if media_path.name in self.failures:
            raise self.failures[media_path.name]
        return self.scenario_at(media_path)


class FakeCopier(IStreamCopier):
    def __init__(self, fail_on=()):
        self.fail_on = set(fail_on)
        self.jobs = []

    def copy_streams(self, job: DemuxJob) -> None:
        self.jobs.append(job)
        job.output_path.write_bytes(b"STREAM")
        if job.output_path.name in self.fail_on:
            raise ExtractionError("No space left on device")


class BrokenCorrelator:
    """Claims nothing but pairs audio 1, which breaks the audio partition."""

    def correlate(self, catalog):
        return CorrelationResult(claimed=frozenset(), pairings=[VideoPairing(0, 1, positional=True)])


@pytest.fixture
def season(tmp_path):
    folder = tmp_path / "Season 1"
    folder.mkdir()
    episodes = []
    for name in ("E01.mkv", "E02.mkv", "E03.mkv"):
        path = folder / name
        path.write_bytes(b"FAKE_MKV")
        episodes.append(path)
    return episodes


def make_demuxer(prober, copier, ledger=None, dry_run=False, correlator=None):
    builder = DemuxPlanBuilder(LanguageSuffixResolver(fallback="echo"), correlator=correlator)
    return BatchDemuxer(prober, builder, PlanExecutor(copier), ledger=ledger, dry_run=dry_run)


def test_batch_continues_past_failures(season, scenario_at, session_factory):
    ledger = SqlLedgerRepository(session_factory)
    prober = FakeProber(scenario_at, failures={"E02.mkv": ProbeError("Invalid data found")})
    copier = FakeCopier(fail_on={"E03.dub.mp4"})

    summary = make_demuxer(prober, copier, ledger).process_batch(season)

    # 1. Counts
    assert summary.files_found == 3
    assert summary.files_processed == 2
    assert summary.files_failed == 1
    assert summary.jobs_completed == 7
    assert summary.jobs_failed == 1
    assert not summary.ok
    assert len(summary.errors) == 2

    # 2. Outputs
    folder = season[0].parent
    assert (folder / "E01.mp4").exists()
    assert (folder / "E01.dub.mp4").exists()
    assert (folder / "E01.en.ass").exists()
    assert (folder / "E01.dub.en.ass").exists()
    assert not (folder / "E03.dub.mp4").exists()  # partial removed

    # 3. Ledger
    first, second, third = summary.outcomes
    assert ledger.get_run(first.run_id).state == RunState.CLEANED_UP
    assert ledger.get_run(second.run_id).state == RunState.FAILED
    assert "Invalid data found" in ledger.get_run(second.run_id).error_message
    third_run = ledger.get_run(third.run_id)
    assert third_run.state == RunState.CLEANED_UP
    assert [j.status for j in third_run.jobs] == [
        JobStatus.COMPLETED, JobStatus.FAILED, JobStatus.COMPLETED, JobStatus.COMPLETED
    ]
    assert first.succeeded
    assert not third.succeeded


def test_files_are_processed_in_order(season, scenario_at):
    copier = FakeCopier()

    make_demuxer(FakeProber(scenario_at), copier).process_batch(season)

    assert [j.source_file.name for j in copier.jobs][::4] == ["E01.mkv", "E02.mkv", "E03.mkv"]


def test_dry_run_extracts_nothing(season, scenario_at):
    copier = FakeCopier()

    summary = make_demuxer(FakeProber(scenario_at), copier, dry_run=True).process_batch(season)

    assert copier.jobs == []
    assert all(o.state == RunState.PLANNED for o in summary.outcomes)
    assert all(len(o.plan.jobs) == 4 for o in summary.outcomes)
    assert summary.ok


def test_missing_source_is_a_file_failure(tmp_path, scenario_at):
    class DiskProber(FakeProber):
        def probe(self, media_path):
            if not media_path.exists():
                raise FileNotFoundError(media_path)
            return super().probe(media_path)

    summary = make_demuxer(DiskProber(scenario_at), FakeCopier()).process_batch([tmp_path / "gone.mkv"])

    assert summary.files_failed == 1
    assert summary.outcomes[0].state == RunState.FAILED


def test_unexpected_error_fails_the_run_and_the_batch_goes_on(season, scenario_at, session_factory):
    ledger = SqlLedgerRepository(session_factory)
    demuxer = make_demuxer(FakeProber(scenario_at), FakeCopier(), ledger, correlator=BrokenCorrelator())

    summary = demuxer.process_batch(season)

    assert summary.files_found == 3
    assert summary.files_failed == 3
    assert summary.outcomes == []
    assert {r.state for r in ledger.list_runs()} == {RunState.FAILED}
