"""
Domain services: pure functions over provider documents, inference output
and observed/predicted pairs.
"""

from .anomaly_decider import AnomalyDecider, percent_change
from .document_parser import parse_document, parse_instant, scan_float
from .prediction_parser import parse_predictions, strip_label_column

__all__ = [
    "AnomalyDecider",
    "parse_document",
    "parse_instant",
    "parse_predictions",
    "percent_change",
    "scan_float",
    "strip_label_column",
]
