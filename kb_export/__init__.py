"""Knowledge-base export package.

This package exports the documents of a Voiceflow knowledge base into local
files and bundles the plain-text exports into a zip archive. It includes a
low-level API client (KnowledgeBaseClient), the export workflow
(KnowledgeBaseExporter) and the interactive `kb-export` command.

Example Usage:
    # Interactive CLI
    $ kb-export

    # Programmatic use
    from kb_export import KnowledgeBaseClient, KnowledgeBaseExporter

    async with KnowledgeBaseClient(
        'https://api.voiceflow.com/v1/knowledge-base',
        'VF.DM.xxxx'
    ) as client:
        result = await KnowledgeBaseExporter(client, 'exports').run()
        print(result.archive_path)
"""

from ._version import __version__, __version_info__
from .exceptions import (
    KbExportException,
    ApiRequestError,
    ExportWriteError,
    ArchiveError,
    PrompterClosedError
)
from .models import (
    DocumentType,
    DocumentSummary,
    DocumentPage,
    DocumentContent,
    ExportRun,
    ExportResult
)
from .config import ExportConfig
from .client import KnowledgeBaseClient
from .exporter import KnowledgeBaseExporter
from .session import ConsolePrompter, Session

__all__ = [
    # Version
    '__version__',
    '__version_info__',

    # Main classes
    'KnowledgeBaseClient',
    'KnowledgeBaseExporter',
    'ConsolePrompter',
    'Session',
    'ExportConfig',

    # Exceptions
    'KbExportException',
    'ApiRequestError',
    'ExportWriteError',
    'ArchiveError',
    'PrompterClosedError',

    # Models
    'DocumentType',
    'DocumentSummary',
    'DocumentPage',
    'DocumentContent',
    'ExportRun',
    'ExportResult',
]
