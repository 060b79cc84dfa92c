import argparse
import logging
from pathlib import Path
from typing import List, Optional, Sequence

from streamsplit.core.common.enums import UnknownLanguagePolicy
from streamsplit.core.config.settings import settings
from streamsplit.core.logging_utils import setup_logging
from streamsplit.features.batch.service.cleanup import confirm_deletion, delete_sources
from streamsplit.features.batch.service.orchestrator import BatchDemuxer
from streamsplit.features.demux_plan.service.builder import DemuxPlanBuilder
from streamsplit.features.extraction.data.ffmpeg_adapter import FFmpegStreamCopier
from streamsplit.features.extraction.service.executor import PlanExecutor
from streamsplit.features.language_suffix.service.resolver import LanguageSuffixResolver
from streamsplit.features.source_scanner.domain.models import ScanRequest
from streamsplit.features.source_scanner.service.scanner import SourceScanner
from streamsplit.features.stream_catalog.data.ffprobe_adapter import FFprobeAdapter

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_FAILURES = 1
EXIT_NOTHING_FOUND = 2


def parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    """Parse CLI arguments for demuxing."""
    parser = argparse.ArgumentParser(
        prog="streamsplit",
        description="Split multi-language MKV files into per-language video, audio and subtitle files "
                    "(lossless stream copy)."
    )
    parser.add_argument("paths", nargs="*", type=Path, default=[Path(".")],
                        help="Directories to scan ('Season *' sub-directories or loose files) "
                             "or individual files (default: current directory)")
    parser.add_argument("--output-dir", type=Path, default=None,
                        help="Write outputs here instead of next to each source")
    parser.add_argument("--dry-run", action="store_true", help="Print the plan without running ffmpeg")
    parser.add_argument("--unknown-language", choices=[p.value for p in UnknownLanguagePolicy],
                        default=None, help="Suffix for languages missing from the table "
                                           "(echo: '.<tag>', empty: no suffix)")
    parser.add_argument("--overwrite", action="store_true", help="Overwrite existing outputs")
    parser.add_argument("--no-ledger", action="store_true", help="Don't record runs in the ledger database")
    parser.add_argument("--history", type=int, metavar="N", default=None,
                        help="Show the last N ledger runs and exit")
    parser.add_argument("--delete-sources", action="store_true",
                        help="Offer to delete sources that were fully extracted")
    parser.add_argument("--yes", action="store_true", help="Don't ask before deleting sources")
    parser.add_argument("--log-level", type=str, default=None, help="Log level (e.g., INFO, DEBUG)")
    return parser.parse_args(argv)


def collect_sources(paths: Sequence[Path], scanner: SourceScanner = None) -> List[Path]:
    """Directories are scanned, files are taken as given; order is preserved."""
    scanner = scanner or SourceScanner()
    sources: List[Path] = []
    for path in paths:
        if path.is_dir():
            request = ScanRequest(
                root_path=path,
                extension=settings.SOURCE_EXTENSION,
                season_prefix=settings.SEASON_DIR_PREFIX
            )
            sources.extend(scanner.scan(request).files)
        elif path.is_file():
            sources.append(path)
        else:
            logger.warning(f"Not found, skipping: {path}")
    return sources


def build_ledger(disabled: bool):
    if disabled:
        return None

    # Imported lazily so --no-ledger never touches the database layer
    from streamsplit.core.database.connection import init_db
    from streamsplit.features.ledger.data.repository import SqlLedgerRepository

    settings.ensure_dirs()
    init_db()
    return SqlLedgerRepository()


def show_history(limit: int) -> int:
    from streamsplit.core.database.connection import init_db
    from streamsplit.features.ledger.service.api import format_run, recent_runs

    settings.ensure_dirs()
    init_db()
    for run in recent_runs(limit):
        print(format_run(run))
    return EXIT_OK


def main(argv: Optional[Sequence[str]] = None) -> int:
    """CLI entry point.

    Examples:
      streamsplit                      # current directory
      streamsplit "/media/Show" --dry-run
      streamsplit episode.mkv --output-dir out --unknown-language empty
    """
    args = parse_args(argv)
    setup_logging(args.log_level)

    if args.history is not None:
        return show_history(args.history)

    sources = collect_sources(args.paths)
    if not sources:
        print("There is no video to work on")
        return EXIT_NOTHING_FOUND

    resolver = LanguageSuffixResolver(fallback=args.unknown_language)
    demuxer = BatchDemuxer(
        prober=FFprobeAdapter(),
        builder=DemuxPlanBuilder(resolver, output_dir=args.output_dir),
        executor=PlanExecutor(FFmpegStreamCopier(overwrite=args.overwrite or None)),
        ledger=build_ledger(args.no_ledger or args.dry_run),
        dry_run=args.dry_run
    )

    summary = demuxer.process_batch(sources)

    if args.dry_run:
        for outcome in summary.outcomes:
            if outcome.plan is None:
                continue
            print(outcome.source)
            for job in outcome.plan.jobs:
                print(f"  {job.describe()}")
    else:
        print("The extraction process is complete.")

    if args.delete_sources and not args.dry_run:
        if args.yes or confirm_deletion():
            deleted = delete_sources(summary.outcomes)
            print(f"{len(deleted)} source files have been deleted.")
        else:
            print("The source files have been kept.")

    for error in summary.errors:
        logger.error(error)
    return EXIT_OK if summary.ok else EXIT_FAILURES


if __name__ == "__main__":
    raise SystemExit(main())
