from .models import MAX_ID, Record, RecordPatch
from .service import RecordService, cache_key, check_id
from .store import RecordStore, SqlRecordStore

__all__ = [
    "MAX_ID",
    "Record",
    "RecordPatch",
    "RecordService",
    "cache_key",
    "check_id",
    "RecordStore",
    "SqlRecordStore",
]
