"""Exception types raised by the habitat designer backend."""

from __future__ import annotations


class HabitatError(Exception):
    """Base class for habitat designer errors."""


class InvalidHabitatError(HabitatError, ValueError):
    """A design payload is missing its config or zones."""


class StorageError(HabitatError):
    """Reading or writing the design store failed."""


class UnknownZoneTypeError(HabitatError, KeyError):
    def __init__(self, type_id: str) -> None:
        super().__init__(type_id)
        self.type_id = type_id

    def __str__(self) -> str:
        return f"Unknown zone type: {self.type_id}"


class ZoneNotFoundError(HabitatError, KeyError):
    def __init__(self, zone_id: int) -> None:
        super().__init__(zone_id)
        self.zone_id = zone_id

    def __str__(self) -> str:
        return f"Zone {self.zone_id} not found"


class AuthError(HabitatError):
    """Account failure surfaced to the client with its own message."""

    status_code = 400

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class MissingFieldsError(AuthError):
    pass


class DuplicateEmailError(AuthError):
    pass


class InvalidEmailError(AuthError):
    pass


class InvalidPasswordError(AuthError):
    pass


class InvalidTokenError(AuthError):
    status_code = 401


class UserNotFoundError(AuthError):
    status_code = 404
