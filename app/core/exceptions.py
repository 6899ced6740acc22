# app/core/exceptions.py


class BookingError(Exception):
    """Base class for booking workflow failures."""


class SlotUnavailableError(BookingError):
    """The requested slot cannot be booked.

    ``availability`` carries the availability check result when the
    refusal came from the checker rather than from a claimed slot.
    """

    def __init__(self, message="This time slot is already booked", availability=None):
        super().__init__(message)
        self.availability = availability


class TotalPriceMismatchError(BookingError):
    def __init__(self, expected: float, given: float):
        super().__init__(f"Expected total {expected:.2f}, got {given:.2f}")
        self.expected = expected
        self.given = given


class ServiceNotFoundError(BookingError):
    def __init__(self, service_id: str):
        super().__init__(f"Service {service_id} not found")
        self.service_id = service_id
