"""Command-line entry point for the knowledge-base exporter.

Usage:
    kb-export [--export-dir DIR] [--log-level LEVEL]

The domain and API key are always prompted for; they are never read from
flags or the environment.
"""

import argparse
import asyncio
import logging
import sys
from typing import List, Optional

from .config import ENV_EXPORT_DIR, ENV_LOG_LEVEL, ExportConfig
from .exporter import KnowledgeBaseExporter
from .models import ExportResult
from .session import ConsolePrompter, Session, configure_session

log = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="kb-export",
        description="Export knowledge-base documents to local files and a zip archive",
    )
    parser.add_argument('--export-dir', help=f'Root directory for exports (env: {ENV_EXPORT_DIR}, default: ./exports)')
    parser.add_argument(
        '--log-level',
        choices=['DEBUG', 'INFO', 'WARNING', 'ERROR'],
        type=str.upper,
        help=f'Logging verbosity (env: {ENV_LOG_LEVEL}, default: INFO)'
    )
    return parser


def setup_logging(config: ExportConfig) -> None:
    """Send log records to stdout, where the progress lines belong."""
    if config.logging_level <= logging.DEBUG:
        fmt = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    else:
        fmt = '%(message)s'
    logging.basicConfig(level=config.logging_level, format=fmt, stream=sys.stdout)


async def export(session: Session, config: ExportConfig) -> ExportResult:
    exporter = KnowledgeBaseExporter.from_session(session, config)
    try:
        return await exporter.run()
    finally:
        await exporter.client.close()


def main(argv: Optional[List[str]] = None, prompter: Optional[ConsolePrompter] = None) -> int:
    """Run one interactive export and return the process exit code."""
    args = build_parser().parse_args(argv)
    try:
        config = ExportConfig.from_env().with_overrides(export_root=args.export_dir, log_level=args.log_level)
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 2
    setup_logging(config)

    with (prompter or ConsolePrompter()) as prompter:
        try:
            session = configure_session(prompter)
            result = asyncio.run(export(session, config))
        except KeyboardInterrupt:
            print("\nAborted.", file=sys.stderr)
            return 130
        except EOFError:
            print("Error: input ended before the domain and API key were entered", file=sys.stderr)
            return 1

    if not result.ok:
        print(f"Error: {result.error}", file=sys.stderr)
        return 1
    log.debug(f"Archive written to {result.archive_path}")
    return 0


def run() -> None:
    sys.exit(main())
