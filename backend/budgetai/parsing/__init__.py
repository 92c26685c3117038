from .scanner import BraceScanner, ScannerState, scan_objects
from .stream import parse_candidate, extract_text, DATA_PARSING_ERROR
from .batch import (
    AnalysisExtractor,
    clean_candidate,
    extract_candidate_text,
    extract_first_object,
    get_flexible_property,
)

__all__ = [
    "BraceScanner",
    "ScannerState",
    "scan_objects",
    "parse_candidate",
    "extract_text",
    "DATA_PARSING_ERROR",
    "AnalysisExtractor",
    "clean_candidate",
    "extract_candidate_text",
    "extract_first_object",
    "get_flexible_property",
]
