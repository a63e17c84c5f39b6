class AppError(RuntimeError):
    """Base for failures surfaced to the client as 500 {"error", "detail"}."""

    public_message = "Server error"


class HandlerError(AppError):
    """A domain handler failed to read or write the datastore.

    The message is prefixed with the handler name, e.g. ``create_hypothesis: ...``.
    """

    def __init__(self, handler: str, message: str):
        self.handler = handler
        super().__init__(f"{handler}: {message}")


class ModelConfigError(AppError):
    """Model provider credentials are missing. Raised before any network call."""

    public_message = "Model provider not configured"


class ModelAPIError(AppError):
    public_message = "Model provider error"

    def __init__(self, status_code: int, body: str):
        self.status_code = status_code
        self.body = body
        super().__init__(f"Model API error ({status_code}): {body}")
