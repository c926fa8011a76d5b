"""Exceptions for the link shortening service layer.

This module contains the exception hierarchy for the service layer,
providing domain-specific exceptions that abstract underlying storage details.
"""


class ServiceError(Exception):
    """Base exception for all service-level errors."""
    pass


class LinkError(ServiceError):
    """Base exception for link-related errors."""
    pass


class InvalidURLError(LinkError):
    """The submitted URL is not a valid absolute URL."""
    pass


class LinkCreationError(LinkError):
    """Error occurred during link creation."""
    pass


class CodeGenerationExhaustedError(LinkCreationError):
    """No unused short code was found within the attempt budget."""
    pass


class LinkNotFoundError(LinkError):
    """No link exists for the requested short code."""
    pass


class LinkLookupError(LinkError):
    """The link store failed while resolving a short code."""
    pass
