import logging
from pathlib import Path
from typing import Callable, Iterable, List, Optional

from ..domain.models import FileOutcome

logger = logging.getLogger(__name__)

DELETE_PROMPT = "Do you want to delete the original MKV files? [y/N]: "


def confirm_deletion(ask: Optional[Callable[[str], str]] = None) -> bool:
    """Accepts 'y' / 'yes' in any case; anything else keeps the files."""
    ask = ask or input
    response = ask(DELETE_PROMPT).strip().lower()
    return response in ("y", "yes")


def delete_sources(outcomes: Iterable[FileOutcome]) -> List[Path]:
    """
    Deletes the source containers that were fully extracted.
    Sources with a failed probe or a failed job are kept.
    """
    deleted: List[Path] = []
    for outcome in outcomes:
        if not outcome.succeeded:
            logger.info(f"Keeping {outcome.source.name}: not fully extracted")
            continue
        if outcome.source.exists():
            outcome.source.unlink()
            deleted.append(outcome.source)
            logger.info(f"Deleted source {outcome.source.name}")
    return deleted
