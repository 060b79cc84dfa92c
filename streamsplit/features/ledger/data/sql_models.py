import uuid
from datetime import datetime, timezone
from sqlalchemy import Column, String, Integer, DateTime, ForeignKey, Enum as SQLEnum, JSON, Uuid
from sqlalchemy.orm import relationship
from streamsplit.core.database.base import Base
from streamsplit.core.common.enums import RunState, JobKind, JobStatus


def utc_now():
    return datetime.now(timezone.utc)


class DemuxRunModel(Base):
    """
    One pass over one source container.

    Tracks where the file got to in the pipeline
    (probed -> correlated -> planned -> extracted -> cleaned_up)
    and the automatic decisions taken on the way.
    """
    __tablename__ = "demux_runs"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    source_path = Column(String, nullable=False, index=True)
    state = Column(SQLEnum(RunState), nullable=False, default=RunState.PROBED)

    # Correlation decisions
    claimed_audio = Column(JSON, default=list)
    standalone_audio = Column(JSON, default=list)
    correlation_failures = Column(JSON, default=list)
    fallback_languages = Column(JSON, default=list)

    error_message = Column(String, nullable=True)
    created_at = Column(DateTime(timezone=True), default=utc_now)
    finished_at = Column(DateTime(timezone=True), nullable=True)

    jobs = relationship(
        "DemuxJobRecordModel",
        back_populates="run",
        cascade="all, delete-orphan",
        order_by="DemuxJobRecordModel.position"
    )


class DemuxJobRecordModel(Base):
    """
    Outcome of one extraction job of a run.
    """
    __tablename__ = "demux_job_records"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    run_id = Column(Uuid, ForeignKey("demux_runs.id"), nullable=False, index=True)
    # Order of the job inside the plan
    position = Column(Integer, nullable=False, default=0)

    kind = Column(SQLEnum(JobKind), nullable=False)
    stream_indices = Column(JSON, default=list)
    output_path = Column(String, nullable=False)
    status = Column(SQLEnum(JobStatus), nullable=False, default=JobStatus.PENDING)
    error_message = Column(String, nullable=True)

    created_at = Column(DateTime(timezone=True), default=utc_now)

    run = relationship("DemuxRunModel", back_populates="jobs")
