class GHLError(Exception):
    def __init__(self, message: str, status_code: int | None = None):
        self.message = message
        self.status_code = status_code
        super().__init__(message)


class RateLimitError(Exception):
    def __init__(self, service: str):
        self.service = service
        super().__init__(f"Rate limit exceeded for {service}")


class UnrecognizedResponseShapeError(Exception):
    """Raised when a CRM response matches none of the known shapes."""

    def __init__(self, kind: str, body: object = None):
        self.kind = kind
        self.body = body
        super().__init__(f"Unrecognized {kind} response shape")


class MissingCallerPhoneError(Exception):
    def __init__(self, message: str = "caller_id is required"):
        self.message = message
        super().__init__(message)
