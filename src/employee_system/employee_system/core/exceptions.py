import math


class DomainError(Exception):
    """Base exception for business rule violations.

    `status_code` is the HTTP status the controller layer answers with.
    """

    status_code = 400


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class InvalidCredentials(DomainError):
    """Unknown email or wrong password. Both cases share one message."""

    status_code = 401

    def __init__(self, message: str = "Invalid credentials"):
        super().__init__(message)


class LocationRequired(DomainError):
    """Geofencing is enabled for the account but no coordinates were sent."""

    status_code = 403

    def __init__(
        self,
        message: str = "Location verification required for this account. "
        "Please enable location access and try again.",
    ):
        super().__init__(message)


class LocationRejected(DomainError):
    """Caller is outside the allowed radius."""

    status_code = 403

    def __init__(self, distance: float, radius: float):
        self.distance = distance
        self.radius = radius
        super().__init__(
            "Login not permitted from this location. "
            f"You are {_round_half_up(distance)}m away from your allowed location "
            f"(radius: {_plain_number(radius)}m)."
        )


class Unauthorized(DomainError):
    status_code = 401

    def __init__(self, message: str = "Unauthorized"):
        super().__init__(message)


class Forbidden(DomainError):
    status_code = 403

    def __init__(self, message: str = "Forbidden - Admin access required"):
        super().__init__(message)


class NotFound(DomainError):
    """Entity absent or owned by another company; the two are never told apart."""

    status_code = 404

    def __init__(self, message: str = "Not found"):
        super().__init__(message)


class SessionDestroyFailure(DomainError):
    status_code = 500

    def __init__(self, message: str = "Could not log out"):
        super().__init__(message)


def _round_half_up(value: float) -> int:
    # round() would send 0.5 to the even neighbour
    return math.floor(value + 0.5)


def _plain_number(value: float):
    # whole values print without a fraction, never in exponent form
    value = float(value)
    return int(value) if value.is_integer() else value
