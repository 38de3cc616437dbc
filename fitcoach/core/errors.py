# core/errors.py


class GenerationError(Exception):
    """Base class for every failure of a generation request."""


class ConfigError(GenerationError):
    """A required external credential is not configured."""


class UpstreamError(GenerationError):
    """The completion endpoint answered with a non-success status or was unreachable."""

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.status_code = status_code


class MalformedPlanError(GenerationError):
    """The model output could not be turned into a valid FitnessPlan."""


class NoImageError(GenerationError):
    """The image response did not carry an image URL."""


class StoreError(Exception):
    """The profile/plan pair could not be written to local storage."""


class ApiError(Exception):
    """The fitcoach API answered a client request with an error."""

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.status_code = status_code
