"""
Domain errors shared by the API, the services and the client.

Every error carries a stable ``code`` (sent over the wire) and the HTTP
status it maps to. ``TransientIO`` is the only retryable category.
"""
from typing import Dict, Optional, Type

from fastapi import status


class VibeCheckError(Exception):
    """Base class for all application errors."""
    code = "VibeCheckError"
    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Something went wrong"
    retryable = False

    def __init__(self, message: Optional[str] = None):
        self.message = message or self.default_message
        super().__init__(self.message)


# Validation

class ValidationError(VibeCheckError):
    code = "ValidationError"
    status_code = status.HTTP_422_UNPROCESSABLE_ENTITY
    default_message = "Invalid input"


class InvalidMood(ValidationError):
    code = "InvalidMood"
    default_message = "Mood must be a whole number between 1 and 5"


class NoteTooLong(ValidationError):
    code = "NoteTooLong"
    default_message = "Note must be 140 characters or less"


class InvalidVibeDate(ValidationError):
    code = "InvalidVibeDate"
    default_message = "Vibe date is outside the accepted range"


# Not found / access

class NotFound(VibeCheckError):
    code = "NotFound"
    status_code = status.HTTP_404_NOT_FOUND
    default_message = "Not found"


class RelationshipNotFound(NotFound):
    code = "RelationshipNotFound"
    default_message = "Invalid invite code"


class UserNotFound(NotFound):
    code = "UserNotFound"
    default_message = "No user found with this email"


class NotAMember(VibeCheckError):
    code = "NotAMember"
    status_code = status.HTTP_403_FORBIDDEN
    default_message = "Access denied to this relationship"


class RecordOwnerMismatch(NotAMember):
    code = "RecordOwnerMismatch"
    default_message = "This offline vibe belongs to another user"


# Conflicts

class Conflict(VibeCheckError):
    code = "Conflict"
    status_code = status.HTTP_409_CONFLICT
    default_message = "Conflict"


class AlreadyMember(Conflict):
    code = "AlreadyMember"
    default_message = "User is already in this relationship"


class RelationshipFull(Conflict):
    code = "RelationshipFull"
    default_message = "This relationship already has two users"


class DuplicateSubmission(Conflict):
    code = "DuplicateSubmission"
    default_message = "You have already submitted a vibe today"


class InviteCodeUnavailable(Conflict):
    code = "InviteCodeUnavailable"
    default_message = "Could not generate a unique invite code"


class EmailAlreadyRegistered(Conflict):
    code = "EmailAlreadyRegistered"
    default_message = "User already exists with this email"


# Infrastructure

class TransientIO(VibeCheckError):
    code = "TransientIO"
    status_code = status.HTTP_503_SERVICE_UNAVAILABLE
    default_message = "Service temporarily unavailable"
    retryable = True


def _collect(cls: Type[VibeCheckError]) -> Dict[str, Type[VibeCheckError]]:
    found = {cls.code: cls}
    for sub in cls.__subclasses__():
        found.update(_collect(sub))
    return found


ERRORS_BY_CODE: Dict[str, Type[VibeCheckError]] = _collect(VibeCheckError)


def error_for_code(code: Optional[str], message: Optional[str] = None) -> VibeCheckError:
    """Rebuild a domain error from its wire code (unknown codes fall back to the base class)."""
    error_cls = ERRORS_BY_CODE.get(code or "", VibeCheckError)
    return error_cls(message)
