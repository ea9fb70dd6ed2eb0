"""Project-wide error types."""


class ProjectError(Exception):
    """Base for all Virtual Browser errors."""


class ValidationError(ProjectError):
    """Invalid input data."""


class ExternalServiceError(ProjectError):
    """Failure in a collaborating service or host runtime."""


__all__ = ["ProjectError", "ValidationError", "ExternalServiceError"]
