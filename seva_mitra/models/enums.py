# -*- coding: utf-8 -*-
# SPDX-License-Identifier: Apache-2.0

"""
Enumeration types for the Seva Mitra platform.
"""

from enum import Enum


class ComplaintStatus(str, Enum):
    """Complaint processing status. Any status may follow any other."""
    PENDING = "pending"
    IN_PROGRESS = "in-progress"
    COMPLETED = "completed"
