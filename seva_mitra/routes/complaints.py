# SPDX-License-Identifier: Apache-2.0

"""
Complaint endpoints.

Citizens submit complaints tied to their phone number; staff move them
through the pending, in-progress and completed statuses.
"""

from flask import jsonify, current_app
from flask_openapi3 import APIBlueprint, Tag
from opentelemetry import trace
from pymongo import DESCENDING
from pymongo.errors import PyMongoError
import logging

from ..middleware.error_handler import (
    ValidationException, BadRequestException, NotFoundException, StoreException
)
from ..middleware.validation import get_request_data, validate_model
from ..models.entities import Complaint
from ..models.enums import ComplaintStatus
from ..models.requests import UpdateComplaintStatusRequest, ComplaintPath, PhoneNumberPath
from ..services.mongodb import COMPLAINTS_COLLECTION

# Set up logging and tracing
logger = logging.getLogger(__name__)
tracer = trace.get_tracer(__name__)

REQUIRED_FIELDS = ("phoneNumber", "category", "description")

complaints_tag = Tag(name="Complaints", description="Citizen complaint tracking")
complaints_bp = APIBlueprint(
    'complaints',
    __name__,
    url_prefix='/api/complaints',
    abp_tags=[complaints_tag]
)


@complaints_bp.post('', strict_slashes=False)
def create_complaint():
    """
    Submit a complaint.

    Requires phoneNumber, category and description; status defaults to pending.
    """
    with tracer.start_as_current_span("complaint.create", attributes={"operation": "create"}) as span:
        data = get_request_data()

        if not all(data.get(field) for field in REQUIRED_FIELDS):
            missing = [field for field in REQUIRED_FIELDS if not data.get(field)]
            span.set_attribute("complaint.missing_fields", missing)
            raise ValidationException("Missing required fields", missing)

        complaint = validate_model(Complaint, {
            "phoneNumber": data["phoneNumber"],
            "category": data["category"],
            "description": data["description"],
            "status": data.get("status") or ComplaintStatus.PENDING
        })

        try:
            saved = current_app.mongodb_service.create(COMPLAINTS_COLLECTION, complaint.to_document())
        except PyMongoError as e:
            raise StoreException(str(e))

        span.set_attribute("complaint.id", saved["_id"])
        logger.info(
            "Complaint created",
            extra={
                "complaint_id": saved["_id"],
                "category": saved["category"],
                "status": saved["status"]
            }
        )

        return jsonify(saved), 201


@complaints_bp.get('', strict_slashes=False)
def list_complaints():
    """List all complaints, newest first."""
    with tracer.start_as_current_span("complaint.list", attributes={"operation": "list"}):
        try:
            complaints = current_app.mongodb_service.find(
                COMPLAINTS_COLLECTION,
                sort=[("createdAt", DESCENDING)]
            )
        except PyMongoError as e:
            raise StoreException(str(e))

        return jsonify(complaints)


@complaints_bp.get('/phone/<phone_number>')
def list_complaints_by_phone(path: PhoneNumberPath):
    """List the complaints submitted from one phone number."""
    with tracer.start_as_current_span("complaint.list_by_phone", attributes={"operation": "list_by_phone"}):
        try:
            complaints = current_app.mongodb_service.find(
                COMPLAINTS_COLLECTION,
                filters={"phoneNumber": path.phone_number}
            )
        except PyMongoError as e:
            raise StoreException(str(e))

        return jsonify(complaints)


@complaints_bp.put('/<complaint_id>/status')
def update_complaint_status(path: ComplaintPath):
    """
    Change a complaint's status.

    Any status may follow any other. Only the status field is written.
    """
    with tracer.start_as_current_span(
        "complaint.update_status",
        attributes={"operation": "update_status", "complaint.id": path.complaint_id}
    ) as span:
        data = get_request_data()

        status_update = validate_model(UpdateComplaintStatusRequest, {"status": data.get("status")})

        try:
            updated = current_app.mongodb_service.update_by_id(
                COMPLAINTS_COLLECTION,
                path.complaint_id,
                {"status": status_update.status}
            )
        except (ValueError, PyMongoError) as e:
            raise BadRequestException(str(e))

        if updated is None:
            raise NotFoundException("Complaint not found")

        span.set_attribute("complaint.status", updated["status"])
        logger.info(
            "Complaint status updated",
            extra={"complaint_id": path.complaint_id, "status": updated["status"]}
        )

        return jsonify(updated)
