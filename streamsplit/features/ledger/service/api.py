from typing import List
from streamsplit.core.common.enums import JobStatus
from ..domain.models import RunRecord
from ..data.repository import SqlLedgerRepository


def recent_runs(limit: int = 20) -> List[RunRecord]:
    """
    Standalone API: the latest runs recorded in the configured ledger.
    """
    return SqlLedgerRepository().list_runs(limit)


def format_run(run: RunRecord) -> str:
    """One-line summary, e.g. 'cleaned_up  Show - S01E01.mkv  jobs 4/4  claimed [1, 2]'"""
    done = sum(1 for j in run.jobs if j.status == JobStatus.COMPLETED)
    line = f"{run.state.value:<11} {run.source_path}  jobs {done}/{len(run.jobs)}  claimed {run.claimed_audio}"
    if run.correlation_failures:
        line += f"  unpaired videos {[f['video_index'] for f in run.correlation_failures]}"
    if run.error_message:
        line += f"  error: {run.error_message}"
    return line
