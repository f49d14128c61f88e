from rest_framework.views import exception_handler as drf_exception_handler
from rest_framework.exceptions import APIException, ValidationError
from rest_framework.response import Response
from rest_framework import status
import logging

logger = logging.getLogger("togethr.api")


class Conflict(APIException):
    status_code = status.HTTP_409_CONFLICT
    default_detail = "Conflict."
    default_code = "conflict"


class InvalidOperation(APIException):
    """The request is well-formed but not allowed in the current state."""
    status_code = status.HTTP_400_BAD_REQUEST
    default_detail = "Invalid operation."
    default_code = "invalid_operation"


def _flatten_fields(data, prefix=""):
    """Turn DRF's nested error dict into [{"field": ..., "message": ...}]."""
    fields = []
    if isinstance(data, dict):
        for key, value in data.items():
            # Newer DRF keys list-serializer errors by row index
            if isinstance(key, int) or str(key).isdigit():
                name = f"{prefix}[{key}]" if prefix else str(key)
            else:
                name = f"{prefix}.{key}" if prefix else str(key)
            fields.extend(_flatten_fields(value, name))
    elif isinstance(data, list):
        for index, value in enumerate(data):
            if isinstance(value, (dict, list)):
                fields.extend(_flatten_fields(value, f"{prefix}[{index}]" if prefix else str(index)))
            else:
                fields.append({"field": prefix or "non_field_errors", "message": str(value)})
    else:
        fields.append({"field": prefix or "non_field_errors", "message": str(data)})
    return fields


def _first_message(data):
    if isinstance(data, dict):
        if "detail" in data:
            return str(data["detail"])
        for value in data.values():
            return _first_message(value)
    if isinstance(data, list) and data:
        return _first_message(data[0])
    return str(data)


def custom_exception_handler(exc, context):
    """
    Wrap DRF + Django exceptions into a consistent response format:

        {"success": false, "error": "<message>", "fields": [...]}

    `fields` is only present for validation errors.
    Success responses (2xx) are not touched.
    """
    response = drf_exception_handler(exc, context)

    # If DRF handled it, wrap it
    if response is not None:
        body = {"success": False}
        if isinstance(exc, ValidationError):
            fields = _flatten_fields(response.data)
            body["error"] = fields[0]["message"] if len(fields) == 1 else "Validation failed"
            body["fields"] = fields
        else:
            body["error"] = _first_message(response.data)
        response.data = body
        return response

    # Unhandled exceptions -> 500
    logger.exception("Unhandled API exception", exc_info=exc)

    return Response(
        {
            "success": False,
            "error": "Internal server error.",
        },
        status=status.HTTP_500_INTERNAL_SERVER_ERROR,
    )
