from .base import ProtectedView, ReadingListActions, status_label
from .catalog import CatalogView
from .ingestion import IngestionView, SelectedFile
from .reader import ReaderView, SIGNED_URL_EXPIRY
from .reading_list import ReadingListView, partition_by_status

__all__ = [
    'ProtectedView',
    'ReadingListActions',
    'status_label',
    'CatalogView',
    'IngestionView',
    'SelectedFile',
    'ReaderView',
    'SIGNED_URL_EXPIRY',
    'ReadingListView',
    'partition_by_status',
]
