from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional

from streamsplit.core.common.enums import JobStatus
from streamsplit.features.demux_plan.domain.models import DemuxJob


@dataclass
class JobOutcome:
    job: DemuxJob
    status: JobStatus = JobStatus.PENDING
    error_message: Optional[str] = None
    # The output did not exist before this job ran (safe to delete on failure)
    created_output: bool = False

    @property
    def output_path(self) -> Path:
        return self.job.output_path


@dataclass
class ExtractionReport:
    """
    Report returned after a plan has been executed.
    """
    source_file: Path
    outcomes: List[JobOutcome] = field(default_factory=list)
    removed_partials: List[Path] = field(default_factory=list)

    @property
    def succeeded(self) -> List[JobOutcome]:
        return [o for o in self.outcomes if o.status == JobStatus.COMPLETED]

    @property
    def failed(self) -> List[JobOutcome]:
        return [o for o in self.outcomes if o.status == JobStatus.FAILED]

    @property
    def ok(self) -> bool:
        return not self.failed
