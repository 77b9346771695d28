import argparse
import logging
import sys
from pathlib import Path

from .core import ExportPipeline
from .exceptions import BearExportError
from .reporting import ProgressMonitor, format_summary
from .worker import ExportWorker
from . import config

def setup_logging(dest_root: Path, verbose: bool):
    """Sets up logging to both console and a file in the destination."""
    log_level = logging.DEBUG if verbose else logging.INFO

    # Create dest root if it doesn't exist so we can log there
    dest_root.mkdir(parents=True, exist_ok=True)
    log_file = dest_root / config.LOG_FILE_NAME

    logging.basicConfig(
        level=log_level,
        format="%(asctime)s [%(levelname)s] %(message)s",
        handlers=[
            logging.FileHandler(log_file, encoding='utf-8'),
            logging.StreamHandler(sys.stdout)
        ]
    )

def parse_args(argv=None):
    p = argparse.ArgumentParser(description="Bear Export: notes to JSON plus attachments")

    p.add_argument("dest", type=Path, help="Output directory")
    p.add_argument("--source", type=Path, default=config.DEFAULT_BEAR_PATH,
                   help=f"Bear data directory (default: {config.DEFAULT_BEAR_PATH})")
    p.add_argument("--include-trashed", action="store_true", help="Also export trashed notes")
    p.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")

    return p.parse_args(argv)

def main(argv=None):
    args = parse_args(argv)

    # 1. Setup
    dest_root = args.dest.expanduser().resolve()
    src_root = args.source.expanduser().resolve()

    if not (src_root / config.DB_RELPATH).is_file():
        print(f"No Bear database found under {src_root}", file=sys.stderr)
        sys.exit(1)

    setup_logging(dest_root, args.verbose)

    logging.info("=== Bear Export Started ===")
    logging.info(f"Source: {src_root}")
    logging.info(f"Dest:   {dest_root}")

    # 2. Execution
    pipeline = ExportPipeline(
        source_root=src_root,
        dest_root=dest_root,
        include_trashed=args.include_trashed,
        show_progress=False,
    )

    with ExportWorker(pipeline) as worker:
        future = worker.start()
        try:
            snap = ProgressMonitor(worker.run).follow(future)
            future.result()
        except KeyboardInterrupt:
            logging.warning("Interrupted; the export thread finishes on its own.")
            worker.shutdown(wait=False)
            sys.exit(1)
        except BearExportError:
            logging.exception("Fatal error during export.")
            snap = worker.run.snapshot()
        except Exception:
            logging.exception("Unexpected error during export.")
            sys.exit(1)

    for line in format_summary(snap):
        logging.info(line)

    sys.exit(0 if snap.succeeded else 1)

if __name__ == "__main__":
    main()
