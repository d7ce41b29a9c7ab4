class LinkError(Exception):
    """Base error for link operations; carries the HTTP status to report."""

    status_code = 400
    message = "Link request failed"

    def __init__(self, message: str | None = None):
        super().__init__(message or self.message)
        self.message = message or self.message


class InvalidLink(LinkError):
    status_code = 400
    message = "Invalid link"


class LinkNotFound(LinkError):
    status_code = 404
    message = "Link not found"


class ShortCodeTaken(LinkError):
    status_code = 409
    message = "This short code already exists."


class ShortCodeExhausted(LinkError):
    status_code = 503
    message = "Could not generate a unique short code, try again."


class AuthError(Exception):
    status_code = 401

    def __init__(self, message: str = "Unauthorized"):
        super().__init__(message)
        self.message = message
