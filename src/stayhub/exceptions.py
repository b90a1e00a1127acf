"""Domain exceptions raised by services and caught by routers.

Services raise these to signal business-rule violations.
Exception handlers in main.py translate them into the standard
error envelope: {"error": {"code": "...", "message": "..."}}.
"""


class DomainError(Exception):
    """Base class for all domain exceptions."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class NotFoundError(DomainError):
    """Raised when a requested entity does not exist."""

    def __init__(self, entity: str, identifier: object) -> None:
        self.entity = entity
        self.identifier = identifier
        super().__init__(f"{entity} with id {identifier} not found")


class AuthenticationError(DomainError):
    """Raised when the caller's identity cannot be established."""


class InvalidCredentialsError(AuthenticationError):
    """Same message whether or not the email exists."""

    def __init__(self) -> None:
        super().__init__("Invalid email or password")


class NotAuthorizedError(DomainError):
    """Raised when a role or ownership check fails."""


class ApprovalPendingError(NotAuthorizedError):
    """Raised when an unapproved hotel owner reaches a full-access operation."""

    def __init__(self) -> None:
        super().__init__("Your account is pending admin approval.")


class ValidationFailedError(DomainError):
    """Raised when input violates a business constraint.

    ``errors`` carries every individual violation so callers can report them
    all at once.
    """

    def __init__(self, message: str, errors: list[str] | None = None) -> None:
        self.errors = errors or [message]
        super().__init__(message)


class InvalidDateRangeError(ValidationFailedError):
    def __init__(self) -> None:
        super().__init__("Check-out date must be after check-in date")


class ConflictError(DomainError):
    """Raised when an operation conflicts with existing state (e.g. duplicate)."""


class EmailTakenError(ConflictError):
    def __init__(self) -> None:
        super().__init__("User with this email already exists")


class DuplicateReviewError(ConflictError):
    def __init__(self) -> None:
        super().__init__("Review already exists for this booking")


class CapacityExceededError(ConflictError):
    def __init__(self) -> None:
        super().__init__("Room not available for selected dates")


class InvalidStatusTransitionError(ConflictError):
    def __init__(self, current: str, target: str) -> None:
        self.current = current
        self.target = target
        super().__init__(f"Cannot change booking status from {current} to {target}")


class BadRequestError(DomainError):
    """Raised for requests that are well-formed but cannot be honored."""


class InvalidOrExpiredTokenError(BadRequestError):
    def __init__(self) -> None:
        super().__init__("Invalid or expired reset token")


class OAuthAccountNoPasswordError(BadRequestError):
    def __init__(self) -> None:
        super().__init__(
            "This account uses OAuth authentication. Please sign in with your OAuth provider."
        )


class UpstreamUnavailableError(DomainError):
    """Raised when a third-party collaborator (LLM, mailer, geocoder) fails."""


class ProviderUnavailableError(UpstreamUnavailableError):
    def __init__(self, message: str = "Failed to generate AI response") -> None:
        super().__init__(message)


class GeocodeFailedError(UpstreamUnavailableError):
    def __init__(
        self,
        message: str = "Failed to geocode address. Please check the address and try again.",
    ) -> None:
        super().__init__(message)


class EmailDeliveryFailedError(UpstreamUnavailableError):
    def __init__(self) -> None:
        super().__init__("Email could not be sent")
