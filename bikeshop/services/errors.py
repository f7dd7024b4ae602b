# bikeshop/services/errors.py
"""
Domain errors raised by the services.
Each carries the HTTP status the API answers with; main.py turns them into
{"detail": message} responses.
"""

from fastapi import status


class ShopError(Exception):
    status_code = status.HTTP_400_BAD_REQUEST

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class NotFoundError(ShopError):
    status_code = status.HTTP_404_NOT_FOUND


class ValidationError(ShopError):
    status_code = status.HTTP_422_UNPROCESSABLE_ENTITY


class InvalidTransitionError(ShopError):
    status_code = status.HTTP_409_CONFLICT


class CustomerInUseError(ShopError):
    status_code = status.HTTP_409_CONFLICT


class RecordInUseError(ShopError):
    """Store refused a delete or insert because of a constraint."""
    status_code = status.HTTP_409_CONFLICT


class StoreError(ShopError):
    """Any other database failure."""
    status_code = status.HTTP_503_SERVICE_UNAVAILABLE
