import subprocess
import logging
from pathlib import Path
from streamsplit.core.config.settings import settings
from streamsplit.core.common.errors import ProbeError
from ..domain.interfaces import IStreamProber
from ..domain.models import StreamCatalog
from .probe_parser import parse_probe_output

logger = logging.getLogger(__name__)


class FFprobeAdapter(IStreamProber):
    """
    Concrete implementation of IStreamProber using ffprobe.
    Only the fields the correlator needs are requested.
    """

    def __init__(self, binary: str = None):
        self.binary = binary or settings.FFPROBE_BINARY

    def probe(self, media_path: Path) -> StreamCatalog:
        if not media_path.exists():
            raise FileNotFoundError(f"Media file not found: {media_path}")

        # -loglevel quiet: keep stderr clean, errors surface via the exit code
        # -show_entries: index + codec_type per stream, language + title tags
        cmd = [
            self.binary,
            "-loglevel", "quiet",
            "-print_format", "json",
            "-show_entries", "stream=index,codec_type:stream_tags=language,title",
            str(media_path)
        ]

        logger.debug(f"Probing: {' '.join(cmd)}")

        try:
            result = subprocess.run(
                cmd,
                check=True,
                capture_output=True,
                text=True
            )
        except FileNotFoundError as e:
            raise ProbeError(f"ffprobe not found: {self.binary}") from e
        except subprocess.CalledProcessError as e:
            error_message = e.stderr.strip() if e.stderr else f"exit code {e.returncode}"
            logger.error(f"ffprobe failed for {media_path.name}: {error_message}")
            raise ProbeError(f"Probing {media_path.name} failed: {error_message}") from e

        catalog = parse_probe_output(result.stdout, media_path)
        logger.info(
            f"Probed {media_path.name}: {len(catalog.videos)} video, "
            f"{len(catalog.audios)} audio, {len(catalog.subtitles)} subtitle streams"
        )
        return catalog
