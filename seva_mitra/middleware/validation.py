# -*- coding: utf-8 -*-
# SPDX-License-Identifier: Apache-2.0

"""
Request body parsing and validation using Pydantic models.
"""

from flask import request
from typing import Type, TypeVar, Dict, Any, List
from pydantic import BaseModel, ValidationError
from opentelemetry import trace
import logging

from .error_handler import ValidationException

tracer = trace.get_tracer(__name__)
logger = logging.getLogger(__name__)

ModelT = TypeVar('ModelT', bound=BaseModel)


def get_request_data() -> Dict[str, Any]:
    """
    Read the request body as a dictionary.

    JSON bodies are parsed as JSON (malformed JSON raises a 400), form posts
    as URL-encoded fields. Anything else, including a JSON body that is not
    an object, reads as an empty dictionary.
    """
    if request.is_json:
        data = request.get_json()
    elif request.form:
        data = request.form.to_dict()
    else:
        data = None

    return data if isinstance(data, dict) else {}


def format_validation_errors(validation_error: ValidationError) -> List[Dict[str, Any]]:
    """
    Format Pydantic validation errors for logging.

    Args:
        validation_error: Pydantic ValidationError

    Returns:
        List of formatted error dictionaries
    """
    errors = []

    for error in validation_error.errors():
        field_path = ".".join(str(loc) for loc in error["loc"])
        errors.append({
            "field": field_path,
            "message": error["msg"],
            "type": error["type"],
            "input": error.get("input")
        })

    return errors


def format_validation_message(model_class: Type[BaseModel], validation_error: ValidationError) -> str:
    """Single-line message such as ``Activity validation failed: title: Field required``."""
    details = ", ".join(
        f"{error['field']}: {error['message']}" for error in format_validation_errors(validation_error)
    )
    return f"{model_class.__name__} validation failed: {details}"


def validate_model(model_class: Type[ModelT], data: Dict[str, Any]) -> ModelT:
    """
    Validate data against a Pydantic model.

    Args:
        model_class: Pydantic model class for validation
        data: Input data

    Returns:
        Validated model instance

    Raises:
        ValidationException: If the data does not satisfy the model
    """
    with tracer.start_as_current_span("validation.validate_model") as span:
        span.set_attributes({
            "validation.model": model_class.__name__,
            "http.method": request.method,
            "http.path": request.path
        })

        try:
            validated = model_class.model_validate(data)
            span.set_attribute("validation.result", "success")
            return validated

        except ValidationError as e:
            span.set_attribute("validation.result", "validation_error")
            validation_errors = format_validation_errors(e)

            logger.warning(
                "Request validation failed",
                extra={
                    "model": model_class.__name__,
                    "path": request.path,
                    "method": request.method,
                    "errors": validation_errors
                }
            )

            raise ValidationException(format_validation_message(model_class, e), validation_errors)
