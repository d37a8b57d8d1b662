"""Custom exception types for domain and API layers."""


class AppError(Exception):
    """Base app exception."""


class ValidationError(AppError):
    """Validation failure for user input or provider payloads."""


class IntegrationError(AppError):
    """External integration call failure."""


class PersistenceError(AppError):
    """Relational store read or write failure."""
