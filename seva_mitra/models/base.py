# -*- coding: utf-8 -*-
# SPDX-License-Identifier: Apache-2.0

"""
Base document model with the shared pydantic configuration.
"""

from datetime import datetime
from typing import Any, Dict
from pydantic import BaseModel, ConfigDict


def utc_now() -> datetime:
    """Current UTC time, millisecond precision as stored by MongoDB."""
    now = datetime.utcnow()
    return now.replace(microsecond=now.microsecond // 1000 * 1000)


class BaseDocument(BaseModel):
    """Base model for documents persisted in a MongoDB collection."""

    model_config = ConfigDict(
        # Allow population by field name or alias
        populate_by_name=True,
        # Use enum values instead of enum objects
        use_enum_values=True,
        # Validate assignment
        validate_assignment=True,
        # Numbers sent for text fields are stored as text
        coerce_numbers_to_str=True
    )

    def to_document(self) -> Dict[str, Any]:
        """Dump the model using stored (camelCase) field names."""
        return self.model_dump(by_alias=True)


class BaseUpdate(BaseModel):
    """Base model for partial update requests."""

    model_config = ConfigDict(
        populate_by_name=True,
        use_enum_values=True,
        coerce_numbers_to_str=True
    )

    def to_updates(self) -> Dict[str, Any]:
        """Dump only the fields present in the request."""
        return self.model_dump(by_alias=True, exclude_unset=True, exclude_none=True)
