from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional
from uuid import UUID

from streamsplit.core.common.enums import RunState
from streamsplit.features.demux_plan.domain.models import DemuxPlan
from streamsplit.features.extraction.domain.models import ExtractionReport


@dataclass
class FileOutcome:
    """
    Where one source file ended up.
    """
    source: Path
    state: RunState
    plan: Optional[DemuxPlan] = None
    report: Optional[ExtractionReport] = None
    error_message: Optional[str] = None
    run_id: Optional[UUID] = None

    @property
    def succeeded(self) -> bool:
        """Fully processed with every job extracted."""
        if self.state != RunState.CLEANED_UP:
            return False
        return self.report is None or self.report.ok


@dataclass
class BatchSummary:
    """
    Report returned after the whole batch ran.
    """
    files_found: int = 0
    files_processed: int = 0
    files_failed: int = 0
    jobs_completed: int = 0
    jobs_failed: int = 0
    outcomes: List[FileOutcome] = field(default_factory=list)
    errors: List[str] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return self.files_failed == 0 and self.jobs_failed == 0
