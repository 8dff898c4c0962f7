"""
Error taxonomy shared by every app.

Each service raises one of the concrete kinds below. They are DRF
``APIException`` subclasses, so views can let them propagate and the
project exception handler renders them into the response envelope.

Hierarchy:
    DomainValidationError (400)
    AuthorizationError (403)
    NotFoundError (404)
    LimitExceededError (403)
    DependencyError (500)
"""
from rest_framework import status
from rest_framework.exceptions import APIException


class DomainValidationError(APIException):
    """Malformed or out-of-range input."""
    status_code = status.HTTP_400_BAD_REQUEST
    default_detail = 'Invalid input.'
    default_code = 'validation_error'


class AuthorizationError(APIException):
    """Acting user lacks rights over the resource."""
    status_code = status.HTTP_403_FORBIDDEN
    default_detail = 'You do not have permission to perform this action.'
    default_code = 'authorization_error'


class NotFoundError(APIException):
    """Referenced entity is absent."""
    status_code = status.HTTP_404_NOT_FOUND
    default_detail = 'Resource not found.'
    default_code = 'not_found'


class LimitExceededError(APIException):
    """Plan or trial gate denied the mutation."""
    status_code = status.HTTP_403_FORBIDDEN
    default_detail = 'Plan limit reached.'
    default_code = 'limit_exceeded'


class DependencyError(APIException):
    """A required side effect failed; the operation was not applied."""
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_detail = 'A required dependency failed.'
    default_code = 'dependency_error'
