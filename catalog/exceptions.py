# catalog/exceptions.py
"""
Errors raised by the catalog's service layer.

They are DRF ``APIException`` subclasses so a view can answer with
``{"error": str(e)}`` and ``e.status_code`` without a translation table.
A missing entity is not an error here: repository lookups return ``None``
and the view raises ``NotFound``.
"""

from rest_framework import status
from rest_framework.exceptions import APIException


class MissingField(APIException):
    status_code = status.HTTP_400_BAD_REQUEST
    default_detail = "A required field is missing."
    default_code = 'missing_field'


class InvalidMetadata(APIException):
    status_code = status.HTTP_400_BAD_REQUEST
    default_detail = "Metadata is not valid JSON."
    default_code = 'invalid_metadata'


class InvalidChoice(APIException):
    status_code = status.HTTP_400_BAD_REQUEST
    default_detail = "Value is not one of the allowed choices."
    default_code = 'invalid_choice'


class PayloadTooLarge(APIException):
    status_code = status.HTTP_413_REQUEST_ENTITY_TOO_LARGE
    default_detail = "Uploaded file exceeds the maximum allowed size."
    default_code = 'payload_too_large'


class PayloadMissing(APIException):
    status_code = status.HTTP_404_NOT_FOUND
    default_detail = "File not found on disk."
    default_code = 'payload_missing'


class StorageUnavailable(APIException):
    status_code = status.HTTP_503_SERVICE_UNAVAILABLE
    default_detail = "The file storage area is unavailable."
    default_code = 'storage_unavailable'
