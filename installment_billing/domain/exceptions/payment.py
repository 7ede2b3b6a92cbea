"""Payment-related domain exceptions."""

from .base import DomainException


class PaymentNotFoundException(DomainException):
    """Raised when an installment payment cannot be found."""

    def __init__(self, payment_id: str):
        super().__init__(
            message=f"Payment not found: {payment_id}",
            code="PAYMENT_NOT_FOUND",
        )
        self.payment_id = payment_id


class InvalidPaymentRequestException(DomainException):
    """Raised when a payment request fails validation."""

    def __init__(self, message: str):
        super().__init__(
            message=message,
            code="INVALID_PAYMENT_REQUEST",
        )


class InvalidStatusTransitionException(DomainException):
    """Raised when a payment or plan cannot move to the requested status."""

    def __init__(self, entity: str, current: str, requested: str):
        super().__init__(
            message=f"Cannot change {entity} status from {current} to {requested}",
            code="INVALID_STATUS_TRANSITION",
        )
        self.current = current
        self.requested = requested
