# app/core/exceptions.py
"""
Domain error taxonomy.

Every error raised by the stable and campaign services derives from
CampaignManagementError and carries the HTTP status it maps to, so the
API layer renders them with a single exception handler.
"""


class CampaignManagementError(Exception):
    """Base exception for campaign management errors"""

    status_code: int = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class InvalidValueError(CampaignManagementError):
    """Raised when a value falls outside an allowed vocabulary"""

    status_code = 400


class DuplicateResourceError(CampaignManagementError):
    """Raised when a uniqueness rule would be broken by a write"""

    status_code = 409


class NotFoundError(CampaignManagementError):
    """Raised when a referenced id does not exist"""

    status_code = 404


class UnauthorizedError(CampaignManagementError):
    """Raised when the caller neither owns the resource nor is an admin"""

    status_code = 403


class StorageFailureError(CampaignManagementError):
    """Raised when the database rejects a write on an integrity constraint"""

    status_code = 409
