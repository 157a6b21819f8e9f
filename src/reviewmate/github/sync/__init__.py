"""Review sync module - GitHub to database synchronization.

Services:
- ReviewIngestionService: Single review upsert (resolve → fetch → reconcile)
- BatchImportCoordinator: Sequential CSV batch import with progress events
"""

from .batch_import import BatchImportCoordinator, BatchJob, create_batch_job
from .enums import OutputFormat, UpsertAction
from .ingestion import ClientFactory, ReviewIngestionService, default_client_factory
from .results import UpsertResult

__all__ = [
    # Single review ingestion
    "ClientFactory",
    "OutputFormat",
    "ReviewIngestionService",
    "UpsertAction",
    "UpsertResult",
    "default_client_factory",
    # Batch import
    "BatchImportCoordinator",
    "BatchJob",
    "create_batch_job",
]
