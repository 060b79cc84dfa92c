from abc import ABC, abstractmethod
from streamsplit.features.demux_plan.domain.models import DemuxJob


class IStreamCopier(ABC):
    """
    Contract for the lossless stream-copy engine.
    Abstracts away the underlying tool (FFmpeg) from the plan execution.
    """

    @abstractmethod
    def copy_streams(self, job: DemuxJob) -> None:
        """
        Copies the job's streams, by index, into job.output_path without re-encoding.

        Args:
            job: The DemuxJob naming the source, the stream indices and the destination.

        Raises:
            FileNotFoundError: If the source does not exist.
            ExtractionError: If the underlying copy process fails.
        """
        pass
