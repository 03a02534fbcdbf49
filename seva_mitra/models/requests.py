# -*- coding: utf-8 -*-
# SPDX-License-Identifier: Apache-2.0

"""
Request models for API endpoints.
"""

from datetime import datetime
from typing import Optional
from pydantic import BaseModel, Field
from .base import BaseUpdate
from .enums import ComplaintStatus


class UpdateComplaintStatusRequest(BaseUpdate):
    """Request model for changing a complaint's status."""

    status: ComplaintStatus = Field(..., description="New complaint status")


class UpdateActivityRequest(BaseUpdate):
    """Request model for a full or partial activity update."""

    title: Optional[str] = Field(None, min_length=1, description="Activity title")
    description: Optional[str] = Field(None, min_length=1, description="Activity description")
    date: Optional[datetime] = Field(None, description="Activity date")


# Path parameters

class ComplaintPath(BaseModel):
    complaint_id: str = Field(..., description="Complaint identifier")


class PhoneNumberPath(BaseModel):
    phone_number: str = Field(..., description="Citizen phone number")


class ActivityPath(BaseModel):
    activity_id: str = Field(..., description="Activity identifier")
