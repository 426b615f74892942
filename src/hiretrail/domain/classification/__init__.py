"""Rule-based classification of events and messages."""

from __future__ import annotations

from .classifiers import classify_event, classify_message
from .inference import infer_message_status, infer_status, normalize_status_label

__all__ = [
    "classify_event",
    "classify_message",
    "infer_message_status",
    "infer_status",
    "normalize_status_label",
]
