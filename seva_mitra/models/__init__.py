# -*- coding: utf-8 -*-
# SPDX-License-Identifier: Apache-2.0

"""
Models package - Pydantic schemas and data models for the Seva Mitra platform.
"""

# Base models
from .base import BaseDocument, BaseUpdate, utc_now

# Enumerations
from .enums import ComplaintStatus

# Core entities
from .entities import Complaint, Activity

# Request models
from .requests import (
    UpdateComplaintStatusRequest,
    UpdateActivityRequest,
    ComplaintPath,
    PhoneNumberPath,
    ActivityPath
)

__all__ = [
    "BaseDocument",
    "BaseUpdate",
    "utc_now",
    "ComplaintStatus",
    "Complaint",
    "Activity",
    "UpdateComplaintStatusRequest",
    "UpdateActivityRequest",
    "ComplaintPath",
    "PhoneNumberPath",
    "ActivityPath"
]
