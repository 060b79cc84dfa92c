from pathlib import Path


class IgnoreRules:
    """
    Central logic for what files the scanner should skip.
    """

    # Exact file names to ignore
    IGNORED_NAMES = {
        ".DS_Store", "Thumbs.db", "desktop.ini",
    }

    # Download managers leave these next to unfinished containers
    IGNORED_EXTENSIONS = {
        ".tmp", ".part", ".partial", ".crdownload", ".bak", ".swp",
    }

    @classmethod
    def should_ignore(cls, path: Path) -> bool:
        """
        Returns True if the file should be skipped.
        """
        # 1. Check exact name matches
        if path.name in cls.IGNORED_NAMES:
            return True

        # 2. Hidden files (macOS '._' resource forks included)
        if path.name.startswith("."):
            return True

        # 3. Check extensions ('episode.mkv.part' ends in '.part')
        if path.suffix.lower() in cls.IGNORED_EXTENSIONS:
            return True

        return False
