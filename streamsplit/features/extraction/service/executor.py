import logging
from pathlib import Path

from streamsplit.core.common.enums import JobStatus
from streamsplit.core.common.errors import ExtractionError
from streamsplit.features.demux_plan.domain.models import DemuxPlan
from ..domain.interfaces import IStreamCopier
from ..domain.models import ExtractionReport, JobOutcome

logger = logging.getLogger(__name__)


class PlanExecutor:
    """
    Runs every job of a plan through the stream copier.
    Best-effort: a failed job is recorded and the next one still runs.
    """

    def __init__(self, copier: IStreamCopier):
        self.copier = copier

    def execute(self, plan: DemuxPlan) -> ExtractionReport:
        report = ExtractionReport(source_file=plan.source_file)

        for job in plan.jobs:
            outcome = JobOutcome(job=job, created_output=not job.output_path.exists())
            try:
                self.copier.copy_streams(job)
                outcome.status = JobStatus.COMPLETED
                logger.info(f"Extracted {job.describe()}")
            except (ExtractionError, FileNotFoundError) as e:
                outcome.status = JobStatus.FAILED
                outcome.error_message = str(e)
                logger.error(f"Job failed, continuing with the rest of the plan: {job.describe()}: {e}")
            report.outcomes.append(outcome)

        logger.info(
            f"{plan.source_file.name}: {len(report.succeeded)}/{len(report.outcomes)} jobs extracted"
        )
        return report

    @staticmethod
    def cleanup(report: ExtractionReport) -> ExtractionReport:
        """
        Removes partial outputs left behind by failed jobs.
        Files that already existed before the job ran are never touched.
        """
        for outcome in report.failed:
            path: Path = outcome.output_path
            if outcome.created_output and path.exists():
                path.unlink()
                report.removed_partials.append(path)
                logger.info(f"Removed partial output: {path.name}")
        return report
