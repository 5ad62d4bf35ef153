"""Custom exceptions for the bizcrm application."""


class CRMException(Exception):
    """Base exception for bizcrm."""


class ValidationError(CRMException):
    """Raised when input is rejected by a service or calculator."""


class NotFoundError(CRMException):
    """Raised when a lead, deal or invoice id has no row."""

    def __init__(self, resource: str, resource_id: int) -> None:
        self.resource = resource
        self.resource_id = resource_id
        super().__init__(f"{resource} {resource_id} not found")


class DatabaseError(CRMException):
    """Raised when a commit fails; the session has already been rolled back."""


class ConfigurationError(CRMException):
    """Raised when an environment setting is invalid."""
