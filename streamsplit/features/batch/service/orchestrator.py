import logging
from pathlib import Path
from typing import Iterable, Optional

from streamsplit.core.common.enums import RunState
from streamsplit.core.common.errors import MalformedMetadata, ProbeError
from streamsplit.features.demux_plan.service.builder import DemuxPlanBuilder
from streamsplit.features.extraction.service.executor import PlanExecutor
from streamsplit.features.ledger.domain.interfaces import ILedger
from streamsplit.features.stream_catalog.domain.interfaces import IStreamProber
from streamsplit.features.stream_catalog.domain.models import StreamCatalog
from ..domain.models import BatchSummary, FileOutcome

logger = logging.getLogger(__name__)


class BatchDemuxer:
    """
    Drives every file through probed -> correlated -> planned -> extracted -> cleaned_up.
    Files are processed one at a time, in the given order; one file's
    failure never stops the batch.
    """

    def __init__(self,
                 prober: IStreamProber,
                 builder: DemuxPlanBuilder,
                 executor: PlanExecutor,
                 ledger: Optional[ILedger] = None,
                 dry_run: bool = False):
        self.prober = prober
        self.builder = builder
        self.executor = executor
        self.ledger = ledger
        self.dry_run = dry_run

    def process_file(self, source: Path) -> FileOutcome:
        logger.info(f"Processing {source}")

        # 1. Probe (fatal for this file only)
        try:
            catalog = self.prober.probe(source)
        except (ProbeError, MalformedMetadata, FileNotFoundError) as e:
            logger.error(f"Skipping {source.name}: {e}")
            outcome = FileOutcome(source=source, state=RunState.FAILED, error_message=str(e))
            if self.ledger:
                outcome.run_id = self.ledger.start_run(source)
                self.ledger.fail_run(outcome.run_id, str(e))
            return outcome

        outcome = FileOutcome(source=source, state=RunState.PROBED)
        if self.ledger:
            outcome.run_id = self.ledger.start_run(source)

        try:
            return self._run_pipeline(catalog, outcome)
        except Exception as e:
            if self.ledger:
                self.ledger.fail_run(outcome.run_id, str(e))
            raise

    def _run_pipeline(self, catalog: StreamCatalog, outcome: FileOutcome) -> FileOutcome:
        # 2. Correlate (a fresh claimed set per file)
        correlation = self.builder.correlator.correlate(catalog)
        self._advance(outcome, RunState.CORRELATED)

        # 3. Plan
        outcome.plan = self.builder.build(catalog, correlation)
        self._advance(outcome, RunState.PLANNED)

        if self.dry_run:
            for job in outcome.plan.jobs:
                logger.info(f"[dry-run] {job.describe()}")
            return outcome

        # 4. Extract (best-effort per job)
        outcome.report = self.executor.execute(outcome.plan)
        if self.ledger:
            for job_outcome in outcome.report.outcomes:
                self.ledger.record_job(outcome.run_id, job_outcome)
        self._advance(outcome, RunState.EXTRACTED)

        # 5. Clean up partial outputs
        self.executor.cleanup(outcome.report)
        self._advance(outcome, RunState.CLEANED_UP)
        return outcome

    def process_batch(self, sources: Iterable[Path]) -> BatchSummary:
        summary = BatchSummary()

        for source in sources:
            summary.files_found += 1
            try:
                outcome = self.process_file(source)
            except Exception as e:
                error_msg = f"Failed to process {source.name}: {str(e)}"
                logger.exception(error_msg)
                summary.errors.append(error_msg)
                summary.files_failed += 1
                continue

            summary.outcomes.append(outcome)
            if outcome.state == RunState.FAILED:
                summary.files_failed += 1
                summary.errors.append(f"{source.name}: {outcome.error_message}")
                continue

            summary.files_processed += 1
            if outcome.report:
                summary.jobs_completed += len(outcome.report.succeeded)
                summary.jobs_failed += len(outcome.report.failed)
                for failed in outcome.report.failed:
                    summary.errors.append(f"{source.name}: {failed.job.describe()}: {failed.error_message}")

        logger.info(
            f"Batch complete. Processed {summary.files_processed}/{summary.files_found} files, "
            f"{summary.jobs_completed} jobs extracted, {summary.jobs_failed} failed."
        )
        return summary

    def _advance(self, outcome: FileOutcome, state: RunState) -> None:
        outcome.state = state
        if self.ledger:
            plan = outcome.plan if state == RunState.PLANNED else None
            self.ledger.advance(outcome.run_id, state, plan)
