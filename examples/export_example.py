#!/usr/bin/env python3
"""
Example: Using the kb_export KnowledgeBaseClient and KnowledgeBaseExporter APIs

This example shows a non-interactive export (the API key comes from a flag or
the KB_API_KEY environment variable) and a listing-only pass using the
low-level client.

Usage:
    python examples/export_example.py --api-key VF.DM.xxx [--domain eu] [--mode list|export|both]
"""

import argparse
import asyncio
import logging
import os
from collections import Counter

from kb_export import ExportConfig, KnowledgeBaseClient, KnowledgeBaseExporter, Session
from kb_export.session import build_domain, is_valid_api_key


# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
log = logging.getLogger(__name__)


async def list_example(session: Session):
    """Page through the knowledge base and summarize document types and statuses."""
    log.info("=== Listing documents ===")
    types = Counter()
    statuses = Counter()
    async with KnowledgeBaseClient(session.base_url, session.api_key) as client:
        async for page_number, page in client.iter_docs():
            for doc in page.documents:
                types[doc.type.value] += 1
                statuses[doc.status or "UNKNOWN"] += 1
    log.info(f"Types: {dict(types)}")
    log.info(f"Statuses: {dict(statuses)}")


async def export_example(session: Session, export_dir: str):
    """Run a complete export into export_dir."""
    log.info("=== Exporting documents ===")
    exporter = KnowledgeBaseExporter.from_session(session, ExportConfig(export_root=export_dir))
    try:
        result = await exporter.run()
    finally:
        await exporter.client.close()

    if not result.ok:
        raise result.error
    log.info(f"Wrote {len(result.files)} files, skipped {result.skipped} documents")
    log.info(f"Archive: {result.archive_path}")


async def main():
    """Main entry point."""
    parser = argparse.ArgumentParser(description="kb_export API examples")
    parser.add_argument('--api-key', default=os.getenv('KB_API_KEY'), help='API key (default: $KB_API_KEY)')
    parser.add_argument('--domain', default='', help='Custom domain fragment (default: api.voiceflow.com)')
    parser.add_argument('--export-dir', default='exports', help='Export root directory')
    parser.add_argument(
        '--mode',
        choices=['list', 'export', 'both'],
        default='list',
        help='What to run (default: list)'
    )

    args = parser.parse_args()
    if not args.api_key or not is_valid_api_key(args.api_key):
        parser.error("an API key starting with VF.DM. is required")

    session = Session(domain=build_domain(args.domain), api_key=args.api_key)
    try:
        if args.mode in ['list', 'both']:
            await list_example(session)

        if args.mode in ['export', 'both']:
            await export_example(session, args.export_dir)

    except Exception as e:
        log.error(f"Error: {e}", exc_info=True)
        return 1

    return 0


if __name__ == '__main__':
    exit_code = asyncio.run(main())
    exit(exit_code)
