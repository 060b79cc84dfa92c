from dataclasses import dataclass
from pathlib import Path


@dataclass(frozen=True)
class MediaFile:
    """
    A source container or one of the files derived from it.
    Output names are built from the source base name.
    """
    path: Path

    def __post_init__(self):
        if str(self.path).strip() in (".", ""):
            raise ValueError("File path cannot be empty.")

    def ensure_parent_dir(self) -> None:
        """Creates the directory structure for this file if it doesn't exist."""
        self.path.parent.mkdir(parents=True, exist_ok=True)

    def with_suffix_name(self, suffix: str, extension: str) -> Path:
        """
        Derives '<base name><suffix><extension>' next to this file.
        e.g. 'Show - S01E01.mkv' + '.dub' + '.mp4' -> 'Show - S01E01.dub.mp4'
        """
        return self.path.with_name(f"{self.path.stem}{suffix}{extension}")
