# File: streamsplit/core/config/settings.py

import os
import shutil
from pathlib import Path


class Settings:
    # --- Paths ---
    # The ledger lives outside the media directories so scans never pick it up
    DATA_DIR: Path = Path(os.getenv("STREAMSPLIT_DATA_DIR", str(Path.home() / ".streamsplit")))

    # --- Database ---
    @property
    def DATABASE_URL(self) -> str:
        explicit = os.getenv("STREAMSPLIT_DATABASE_URL")
        if explicit:
            return explicit

        # Default: a local SQLite ledger
        return f"sqlite:///{self.DATA_DIR / 'streamsplit.db'}"

    # --- External Tools ---
    # Auto-detect ffmpeg/ffprobe or use env var
    FFMPEG_BINARY: str = os.getenv("FFMPEG_BINARY_PATH", shutil.which("ffmpeg") or "ffmpeg")
    FFPROBE_BINARY: str = os.getenv("FFPROBE_BINARY_PATH", shutil.which("ffprobe") or "ffprobe")

    # --- Extraction ---
    # ffmpeg gets -y when true, -n (never overwrite) otherwise
    OVERWRITE_OUTPUTS: bool = os.getenv("STREAMSPLIT_OVERWRITE", "false").lower() == "true"

    # "echo" -> ".<tag>", "empty" -> ""
    UNKNOWN_LANGUAGE_POLICY: str = os.getenv("STREAMSPLIT_UNKNOWN_LANGUAGE", "echo").lower()

    # --- Discovery ---
    SOURCE_EXTENSION: str = os.getenv("STREAMSPLIT_SOURCE_EXTENSION", ".mkv")
    SEASON_DIR_PREFIX: str = os.getenv("STREAMSPLIT_SEASON_PREFIX", "Season ")

    # --- Logging ---
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")

    def ensure_dirs(self):
        """Creates the ledger directory if it doesn't exist."""
        self.DATA_DIR.mkdir(parents=True, exist_ok=True)


settings = Settings()
