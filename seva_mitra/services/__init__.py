# -*- coding: utf-8 -*-
# SPDX-License-Identifier: Apache-2.0

"""
Services package - External integrations and side effects.
"""

from .mongodb import (
    MongoDBService,
    get_mongodb_service,
    close_mongodb_connection,
    COMPLAINTS_COLLECTION,
    ACTIVITIES_COLLECTION
)
from .health import HealthCheckService

__all__ = [
    "MongoDBService",
    "get_mongodb_service",
    "close_mongodb_connection",
    "COMPLAINTS_COLLECTION",
    "ACTIVITIES_COLLECTION",
    "HealthCheckService"
]
