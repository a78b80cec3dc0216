"""Public API for record stores"""

from .base import DEFAULT_LIMIT, RecordStore
from .ndjson_store import NdjsonRecordStore
