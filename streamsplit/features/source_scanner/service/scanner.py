import logging
from pathlib import Path
from typing import List

from streamsplit.core.common.enums import ScanMode
from ..domain.models import ScanRequest, ScanResult
from ..data.file_walker import LocalFileWalker

logger = logging.getLogger(__name__)


class SourceScanner:
    """
    Finds the containers to demux.
    A root holding 'Season *' directories is a series; otherwise the
    containers directly in the root are processed (a movie or a loose batch).
    """

    def __init__(self):
        self.walker = LocalFileWalker()

    def scan(self, request: ScanRequest) -> ScanResult:
        result = ScanResult()
        self.walker.ignored = 0
        logger.info(f"Starting scan of: {request.root_path}")

        # 1. Season directories take precedence
        season_dirs = self._season_dirs(request)
        if season_dirs:
            logger.info(f"Season directories found: {[d.name for d in season_dirs]}")
            result.mode = ScanMode.SERIES
            result.season_dirs = season_dirs
            for season in season_dirs:
                result.files.extend(self.walker.walk(season, request.extension))
        else:
            # 2. Fall back to files in the root itself
            logger.info("No season directories; looking for files in the root")
            result.files = list(self.walker.walk(request.root_path, request.extension))
            if result.files:
                result.mode = ScanMode.MOVIE

        result.files_ignored = self.walker.ignored
        if not result.files:
            result.mode = ScanMode.EMPTY
            logger.warning(f"No {request.extension} files to work on in {request.root_path}")
        else:
            logger.info(f"Scan complete ({result.mode.value}): {len(result.files)} files")
        return result

    @staticmethod
    def _season_dirs(request: ScanRequest) -> List[Path]:
        return sorted(
            (p for p in request.root_path.iterdir()
             if p.is_dir() and p.name.startswith(request.season_prefix)),
            key=lambda p: p.name
        )
