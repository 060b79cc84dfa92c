from dataclasses import dataclass, field
from pathlib import Path
from typing import List

from streamsplit.core.common.enums import ScanMode


@dataclass(frozen=True)
class ScanRequest:
    """
    User intent to find source containers under a directory.
    """
    root_path: Path
    extension: str = ".mkv"
    season_prefix: str = "Season "

    def __post_init__(self):
        if not self.root_path.exists():
            raise FileNotFoundError(f"Scan root not found: {self.root_path}")
        if not self.root_path.is_dir():
            raise NotADirectoryError(f"Scan root is not a directory: {self.root_path}")


@dataclass
class ScanResult:
    """
    Report returned after scanning completes.
    SERIES: files come from 'Season *' directories.
    MOVIE: files come straight from the root.
    """
    mode: ScanMode = ScanMode.EMPTY
    files: List[Path] = field(default_factory=list)
    season_dirs: List[Path] = field(default_factory=list)
    files_ignored: int = 0
