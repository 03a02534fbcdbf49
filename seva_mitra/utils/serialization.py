# -*- coding: utf-8 -*-
# SPDX-License-Identifier: Apache-2.0

"""
Conversion of stored MongoDB documents into JSON-ready dictionaries.
"""

from datetime import datetime, timezone
from typing import Any, Dict
from bson import ObjectId


def format_timestamp(value: datetime) -> str:
    """
    Format a datetime as ISO-8601 UTC with millisecond precision.

    Naive datetimes are treated as UTC, which is how pymongo returns them.

    Args:
        value: Datetime to format

    Returns:
        String such as ``2025-01-31T10:15:00.000Z``
    """
    if value.tzinfo is not None:
        value = value.astimezone(timezone.utc).replace(tzinfo=None)
    return value.strftime('%Y-%m-%dT%H:%M:%S') + f".{value.microsecond // 1000:03d}Z"


def serialize_value(value: Any) -> Any:
    if isinstance(value, ObjectId):
        return str(value)
    if isinstance(value, datetime):
        return format_timestamp(value)
    if isinstance(value, dict):
        return serialize_document(value)
    if isinstance(value, (list, tuple)):
        return [serialize_value(item) for item in value]
    return value


def serialize_document(document: Dict[str, Any]) -> Dict[str, Any]:
    """Convert ObjectIds to hex strings and datetimes to ISO strings."""
    return {key: serialize_value(value) for key, value in document.items()}
