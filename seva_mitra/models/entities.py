# -*- coding: utf-8 -*-
# SPDX-License-Identifier: Apache-2.0

"""
Core entity models for the Seva Mitra platform.
"""

from datetime import datetime
from pydantic import Field
from .base import BaseDocument, utc_now
from .enums import ComplaintStatus


class Complaint(BaseDocument):
    """Citizen-submitted complaint tied to a phone number."""

    phone_number: str = Field(..., alias="phoneNumber", min_length=1, description="Citizen phone number")
    category: str = Field(..., min_length=1, description="Complaint category")
    description: str = Field(..., min_length=1, description="Complaint description")
    status: ComplaintStatus = Field(default=ComplaintStatus.PENDING, validate_default=True, description="Processing status")
    created_at: datetime = Field(default_factory=utc_now, alias="createdAt", description="Creation timestamp")


class Activity(BaseDocument):
    """Community event or announcement."""

    title: str = Field(..., min_length=1, description="Activity title")
    description: str = Field(..., min_length=1, description="Activity description")
    date: datetime = Field(default_factory=utc_now, description="Activity date, defaults to creation time")
