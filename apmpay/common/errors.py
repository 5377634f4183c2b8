"""Domain error raised by payment providers and the orchestrator."""


class PaymentError(Exception):
    """Any failure of a payment operation.

    Carries a human-readable message and, when the failure came from a lower
    layer (HTTP client, provider API, unexpected exception), the original
    cause. Callers tell failure categories apart by message only.
    """

    def __init__(self, message: str, cause: BaseException | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.cause = cause
        if cause is not None:
            self.__cause__ = cause

    def __str__(self) -> str:
        return self.message
