"""Base domain exception."""


class DomainException(Exception):
    """
    Base exception for all installment-billing domain errors.

    Carries a stable machine-readable ``code`` next to the human message;
    the HTTP layer maps codes to status codes.
    """

    def __init__(self, message: str, code: str = "DOMAIN_ERROR"):
        self.message = message
        self.code = code
        super().__init__(self.message)

    def to_dict(self, request_id: str | None = None) -> dict:
        """Error body returned to API clients."""
        return {
            "error": self.code,
            "message": self.message,
            "request_id": request_id,
        }
