# SPDX-License-Identifier: Apache-2.0

"""
Community activity endpoints: list, create, update and delete.
"""

from flask import jsonify, current_app
from flask_openapi3 import APIBlueprint, Tag
from opentelemetry import trace
from pymongo import DESCENDING
from pymongo.errors import PyMongoError
import logging

from ..middleware.error_handler import BadRequestException, StoreException
from ..middleware.validation import get_request_data, validate_model
from ..models.entities import Activity
from ..models.requests import UpdateActivityRequest, ActivityPath
from ..services.mongodb import ACTIVITIES_COLLECTION

logger = logging.getLogger(__name__)
tracer = trace.get_tracer(__name__)

activities_tag = Tag(name="Activities", description="Community activity records")
activities_bp = APIBlueprint(
    'activities',
    __name__,
    url_prefix='/api/activities',
    abp_tags=[activities_tag]
)


@activities_bp.get('', strict_slashes=False)
def list_activities():
    """List all activities, most recent date first."""
    with tracer.start_as_current_span("activity.list", attributes={"operation": "list"}):
        try:
            activities = current_app.mongodb_service.find(
                ACTIVITIES_COLLECTION,
                sort=[("date", DESCENDING)]
            )
        except PyMongoError as e:
            raise StoreException(str(e))

        return jsonify(activities)


@activities_bp.post('', strict_slashes=False)
def create_activity():
    """
    Create an activity.

    title and description are required; date defaults to the creation time.
    Unknown body fields are ignored.
    """
    with tracer.start_as_current_span("activity.create", attributes={"operation": "create"}) as span:
        activity = validate_model(Activity, get_request_data())

        try:
            saved = current_app.mongodb_service.create(ACTIVITIES_COLLECTION, activity.to_document())
        except PyMongoError as e:
            raise BadRequestException(str(e))

        span.set_attribute("activity.id", saved["_id"])
        logger.info("Activity created", extra={"activity_id": saved["_id"]})

        return jsonify(saved), 201


@activities_bp.put('/<activity_id>')
def update_activity(path: ActivityPath):
    """Replace the supplied fields of an activity."""
    with tracer.start_as_current_span(
        "activity.update",
        attributes={"operation": "update", "activity.id": path.activity_id}
    ):
        changes = validate_model(UpdateActivityRequest, get_request_data())

        try:
            updated = current_app.mongodb_service.update_by_id(
                ACTIVITIES_COLLECTION,
                path.activity_id,
                changes.to_updates()
            )
        except (ValueError, PyMongoError) as e:
            raise BadRequestException(str(e))

        if updated is None:
            raise BadRequestException("Activity not found")

        logger.info(
            "Activity updated",
            extra={"activity_id": path.activity_id, "fields": sorted(changes.to_updates())}
        )

        return jsonify(updated)


@activities_bp.delete('/<activity_id>')
def delete_activity(path: ActivityPath):
    """
    Delete an activity.

    Confirms success whether or not a matching activity existed.
    """
    with tracer.start_as_current_span(
        "activity.delete",
        attributes={"operation": "delete", "activity.id": path.activity_id}
    ) as span:
        try:
            deleted = current_app.mongodb_service.delete_by_id(ACTIVITIES_COLLECTION, path.activity_id)
        except (ValueError, PyMongoError) as e:
            raise StoreException(str(e))

        span.set_attribute("activity.deleted", deleted)
        return jsonify({"message": "Activity deleted successfully"})
