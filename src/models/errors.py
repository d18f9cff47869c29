"""
Caller-visible failures of the feedback summary pipeline.

Each error carries a short ``code`` so callers (HTTP handlers, the CLI) can map
it onto their own status values without inspecting messages.
"""


class FeedbackServiceError(Exception):
    """Base class for classified feedback pipeline failures."""

    code = "internal"

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class InvalidArgumentError(FeedbackServiceError):
    """Request input or a stored reference is missing or malformed."""

    code = "invalid-argument"


class NotFoundError(FeedbackServiceError):
    """Employee or their feedback sheet could not be found."""

    code = "not-found"


class InternalError(FeedbackServiceError):
    """Opaque wrapper for transport and infrastructure failures."""

    code = "internal"

    DEFAULT_MESSAGE = (
        "An error occurred while fetching the feedback summary. "
        "Check the logs for details."
    )

    def __init__(self, message: str = DEFAULT_MESSAGE):
        super().__init__(message)
