from src.config.settings import Settings, StorageBackend
from src.rsvps.repository.base import RecordStore, RecordStoreError
from src.rsvps.repository.file_store import FileRecordStore
from src.rsvps.repository.sheet_store import GspreadSheetClient, SheetRecordStore


def build_record_store(settings: Settings) -> RecordStore:
    if settings.storage_backend == StorageBackend.SHEET:
        return SheetRecordStore(GspreadSheetClient(settings))
    return FileRecordStore(settings.data_file)


__all__ = [
    "FileRecordStore",
    "RecordStore",
    "RecordStoreError",
    "SheetRecordStore",
    "build_record_store",
]
