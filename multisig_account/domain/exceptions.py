"""Base exception classes for the multisig account domain layer."""


class AccountError(Exception):
    """Base exception for all domain errors.

    All domain-specific exceptions MUST inherit from this class.
    This enables consistent error handling across the application.

    Every subclass carries a stable machine-readable ``code`` so that
    hosts and clients can match rejections without parsing messages.
    """

    code: str = "multisig/error"

    def __init__(self, message: str = "") -> None:
        """Initialize the exception with an optional message.

        Args:
            message: Human-readable error description.
        """
        super().__init__(message or self.code)
