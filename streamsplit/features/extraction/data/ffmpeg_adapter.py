import subprocess
import logging
from typing import List
from streamsplit.core.config.settings import settings
from streamsplit.core.common.errors import ExtractionError
from streamsplit.core.shared_types import MediaFile
from streamsplit.features.demux_plan.domain.models import DemuxJob
from ..domain.interfaces import IStreamCopier

logger = logging.getLogger(__name__)


class FFmpegStreamCopier(IStreamCopier):
    """
    Concrete implementation of IStreamCopier using FFmpeg.
    Streams are selected by absolute index and copied as-is (-c copy).
    """

    def __init__(self, binary: str = None, overwrite: bool = None):
        self.binary = binary or settings.FFMPEG_BINARY
        self.overwrite = settings.OVERWRITE_OUTPUTS if overwrite is None else overwrite

    def build_command(self, job: DemuxJob) -> List[str]:
        # -n / -y: never / always overwrite existing outputs (no interactive prompt)
        # -map 0:<i>: select input stream by absolute index, video first
        # -c copy: lossless, no re-encoding
        cmd = [
            self.binary,
            "-hide_banner",
            "-loglevel", "error",
            "-y" if self.overwrite else "-n",
            "-i", str(job.source_file),
        ]
        for index in job.stream_indices:
            cmd.extend(["-map", f"0:{index}"])
        cmd.extend(["-c", "copy", str(job.output_path)])
        return cmd

    def copy_streams(self, job: DemuxJob) -> None:
        if not job.source_file.exists():
            raise FileNotFoundError(f"Source not found: {job.source_file}")

        # 1. Ensure the directory for the output file exists
        MediaFile(job.output_path).ensure_parent_dir()

        # 2. Construct and execute the FFmpeg command
        cmd = self.build_command(job)
        logger.info(f"Executing FFmpeg copy: {' '.join(cmd)}")

        try:
            subprocess.run(
                cmd,
                check=True,
                capture_output=True,
                text=True
            )
        except FileNotFoundError as e:
            raise ExtractionError(f"ffmpeg not found: {self.binary}") from e
        except subprocess.CalledProcessError as e:
            error_message = e.stderr.strip() if e.stderr else "Unknown FFmpeg error"
            logger.error(f"FFmpeg copy failed for {job.output_path.name}. STDERR: {error_message}")
            raise ExtractionError(f"Stream copy failed: {error_message}") from e
