"""Export import: reading, normalization and the import service."""

from playlog.history_import.models import NormalizedPlay
from playlog.history_import.normalizers import SHAPES, RecordShape, detect_shape, normalize_record
from playlog.history_import.reader import extract_records, iter_export_files, load_document

__all__ = [
    "NormalizedPlay",
    "RecordShape",
    "SHAPES",
    "detect_shape",
    "extract_records",
    "iter_export_files",
    "load_document",
    "normalize_record",
]
