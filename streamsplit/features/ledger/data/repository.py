import logging
from datetime import datetime, timezone
from pathlib import Path
from typing import List, Optional
from uuid import UUID

from sqlalchemy.orm import sessionmaker

from streamsplit.core.common.enums import RunState
from streamsplit.core.database.connection import SessionLocal
from streamsplit.features.demux_plan.domain.models import DemuxPlan
from streamsplit.features.extraction.domain.models import JobOutcome
from ..domain.interfaces import ILedger
from ..domain.models import JobRecord, RunRecord, can_advance
from .sql_models import DemuxJobRecordModel, DemuxRunModel

logger = logging.getLogger(__name__)


class SqlLedgerRepository(ILedger):
    """
    SQLAlchemy-backed ledger. The session factory is injected so tests can
    point it at an in-memory SQLite engine.
    """

    def __init__(self, session_factory: sessionmaker = None):
        self.session_factory = session_factory or SessionLocal

    def start_run(self, source_path: Path) -> UUID:
        with self.session_factory() as db:
            run = DemuxRunModel(source_path=str(source_path), state=RunState.PROBED)
            db.add(run)
            db.commit()
            db.refresh(run)
            logger.debug(f"Ledger run {run.id} started for {source_path}")
            return run.id

    def advance(self, run_id: UUID, state: RunState, plan: Optional[DemuxPlan] = None) -> None:
        with self.session_factory() as db:
            run = self._require(db, run_id)

            if not can_advance(run.state, state):
                raise ValueError(f"Run {run_id} cannot move from {run.state.value} to {state.value}")

            run.state = state
            if plan is not None:
                run.claimed_audio = sorted(plan.claimed_audio)
                run.standalone_audio = list(plan.standalone_audio)
                run.correlation_failures = [f.to_dict() for f in plan.correlation_failures]
                run.fallback_languages = list(plan.fallback_languages)
            if state == RunState.CLEANED_UP:
                run.finished_at = datetime.now(timezone.utc)
            db.commit()

    def fail_run(self, run_id: UUID, error_message: str) -> None:
        with self.session_factory() as db:
            run = self._require(db, run_id)
            run.state = RunState.FAILED
            run.error_message = error_message
            run.finished_at = datetime.now(timezone.utc)
            db.commit()

    def record_job(self, run_id: UUID, outcome: JobOutcome) -> None:
        with self.session_factory() as db:
            run = self._require(db, run_id)
            db.add(DemuxJobRecordModel(
                run_id=run.id,
                position=len(run.jobs),
                kind=outcome.job.kind,
                stream_indices=list(outcome.job.stream_indices),
                output_path=str(outcome.output_path),
                status=outcome.status,
                error_message=outcome.error_message
            ))
            db.commit()

    def get_run(self, run_id: UUID) -> Optional[RunRecord]:
        with self.session_factory() as db:
            run = db.get(DemuxRunModel, run_id)
            return self._to_record(run) if run else None

    def list_runs(self, limit: int = 20) -> List[RunRecord]:
        with self.session_factory() as db:
            runs = (
                db.query(DemuxRunModel)
                .order_by(DemuxRunModel.created_at.desc())
                .limit(limit)
                .all()
            )
            return [self._to_record(r) for r in runs]

    @staticmethod
    def _require(db, run_id: UUID) -> DemuxRunModel:
        run = db.get(DemuxRunModel, run_id)
        if not run:
            raise ValueError(f"Ledger run {run_id} not found.")
        return run

    @staticmethod
    def _to_record(run: DemuxRunModel) -> RunRecord:
        return RunRecord(
            id=run.id,
            source_path=run.source_path,
            state=run.state,
            claimed_audio=list(run.claimed_audio or []),
            standalone_audio=list(run.standalone_audio or []),
            correlation_failures=list(run.correlation_failures or []),
            fallback_languages=list(run.fallback_languages or []),
            error_message=run.error_message,
            created_at=run.created_at,
            finished_at=run.finished_at,
            jobs=[
                JobRecord(
                    kind=j.kind,
                    stream_indices=list(j.stream_indices or []),
                    output_path=j.output_path,
                    status=j.status,
                    error_message=j.error_message
                )
                for j in run.jobs
            ]
        )
