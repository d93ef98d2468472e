"""Well-formedness check for speech markup before any backend call."""
from __future__ import annotations

import xml.etree.ElementTree as ET

from .errors import ValidationError

XML_HEADER = '<?xml version="1.0" encoding="UTF-8"?>'
ENVELOPE_TAG = "tts-envelope"


def wrap(text: str) -> str:
    # Root envelope lets plain text and sibling elements parse as one document
    return f"{XML_HEADER}<{ENVELOPE_TAG}>{text}</{ENVELOPE_TAG}>"


def validate_markup(text: str) -> None:
    """Raise ValidationError unless ``text`` parses as markup content.

    ``"Hello"`` and ``"<speak>Hello</speak>"`` pass, ``"<speak>hi"`` does not.
    """
    if not isinstance(text, str):
        raise ValidationError(repr(text), f"expected str, got {type(text).__name__}")
    try:
        ET.fromstring(wrap(text).encode("utf-8"))
    except ET.ParseError as e:
        raise ValidationError(text, str(e)) from e


__all__ = ["validate_markup"]
