from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, List, Optional
from uuid import UUID

from streamsplit.core.common.enums import JobKind, JobStatus, RunState

# Allowed order of the per-file lifecycle
RUN_STATE_ORDER = [
    RunState.PROBED,
    RunState.CORRELATED,
    RunState.PLANNED,
    RunState.EXTRACTED,
    RunState.CLEANED_UP,
]


def can_advance(current: RunState, target: RunState) -> bool:
    """Strictly forward, one or more steps; nothing leaves a terminal state."""
    if current in (RunState.FAILED, RunState.CLEANED_UP):
        return False
    if target == RunState.FAILED:
        return True
    return RUN_STATE_ORDER.index(target) > RUN_STATE_ORDER.index(current)


@dataclass(frozen=True)
class JobRecord:
    kind: JobKind
    stream_indices: List[int]
    output_path: str
    status: JobStatus
    error_message: Optional[str] = None


@dataclass(frozen=True)
class RunRecord:
    """
    Read model of a ledger run, detached from the database session.
    """
    id: UUID
    source_path: str
    state: RunState
    claimed_audio: List[int] = field(default_factory=list)
    standalone_audio: List[int] = field(default_factory=list)
    correlation_failures: List[Dict[str, Any]] = field(default_factory=list)
    fallback_languages: List[str] = field(default_factory=list)
    error_message: Optional[str] = None
    created_at: Optional[datetime] = None
    finished_at: Optional[datetime] = None
    jobs: List[JobRecord] = field(default_factory=list)
