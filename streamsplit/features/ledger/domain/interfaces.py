from abc import ABC, abstractmethod
from pathlib import Path
from typing import List, Optional
from uuid import UUID

from streamsplit.core.common.enums import RunState
from streamsplit.features.demux_plan.domain.models import DemuxPlan
from streamsplit.features.extraction.domain.models import JobOutcome
from .models import RunRecord


class ILedger(ABC):
    """
    Contract for recording what happened to every source file.
    """

    @abstractmethod
    def start_run(self, source_path: Path) -> UUID:
        """Creates a run in the PROBED state and returns its id."""
        pass

    @abstractmethod
    def advance(self, run_id: UUID, state: RunState, plan: Optional[DemuxPlan] = None) -> None:
        """
        Moves the run forward. Backwards moves are rejected.
        When a plan is given, its correlation decisions are stored on the run.
        """
        pass

    @abstractmethod
    def fail_run(self, run_id: UUID, error_message: str) -> None:
        pass

    @abstractmethod
    def record_job(self, run_id: UUID, outcome: JobOutcome) -> None:
        pass

    @abstractmethod
    def get_run(self, run_id: UUID) -> Optional[RunRecord]:
        pass

    @abstractmethod
    def list_runs(self, limit: int = 20) -> List[RunRecord]:
        """Most recent first."""
        pass
