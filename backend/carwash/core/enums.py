# backend/carwash/core/enums.py
"""
Core enums for the car-wash platform.

Values are stored as plain strings in the database, so every enum
subclasses ``str``.
"""

from enum import Enum


class ReservationStatus(str, Enum):
    """Reservation lifecycle statuses."""

    PENDING = "pending"
    CONFIRMED = "confirmed"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"
    CANCELLED = "cancelled"

    @classmethod
    def active(cls) -> tuple["ReservationStatus", ...]:
        """Non-terminal statuses; a client may hold one of these at a time."""
        return (cls.PENDING, cls.CONFIRMED, cls.IN_PROGRESS)

    @classmethod
    def cancellable(cls) -> tuple["ReservationStatus", ...]:
        return (cls.PENDING, cls.CONFIRMED)

    @property
    def is_terminal(self) -> bool:
        return self in (ReservationStatus.COMPLETED, ReservationStatus.CANCELLED)


# Allowed administrative transitions. Terminal states have no exits.
RESERVATION_TRANSITIONS: dict[ReservationStatus, frozenset[ReservationStatus]] = {
    ReservationStatus.PENDING: frozenset({ReservationStatus.CONFIRMED, ReservationStatus.CANCELLED}),
    ReservationStatus.CONFIRMED: frozenset(
        {ReservationStatus.IN_PROGRESS, ReservationStatus.CANCELLED}
    ),
    ReservationStatus.IN_PROGRESS: frozenset({ReservationStatus.COMPLETED}),
    ReservationStatus.COMPLETED: frozenset(),
    ReservationStatus.CANCELLED: frozenset(),
}


class PaymentMethodType(str, Enum):
    CREDIT_CARD = "credit_card"
    DEBIT_CARD = "debit_card"
    PSE = "pse"
    CASH = "cash"

    @property
    def is_card(self) -> bool:
        return self in (PaymentMethodType.CREDIT_CARD, PaymentMethodType.DEBIT_CARD)


class CardBrand(str, Enum):
    VISA = "Visa"
    MASTERCARD = "Mastercard"
    AMERICAN_EXPRESS = "American Express"
    DINERS = "Diners"


class NotificationType(str, Enum):
    RESERVATION = "reservation"
    RATING = "rating"
    PROMOTION = "promotion"
    SYSTEM = "system"


class ReservationEvent(str, Enum):
    """Lifecycle events that produce a client notification."""

    CREATED = "created"
    CONFIRMED = "confirmed"
    STARTED = "started"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


class DocumentType(str, Enum):
    CC = "CC"  # Cedula de ciudadania
    CE = "CE"  # Cedula de extranjeria
    PASSPORT = "PASSPORT"


class VehicleType(str, Enum):
    CAR = "car"
    MOTORCYCLE = "motorcycle"
    PICKUP = "pickup"


class Weekday(str, Enum):
    """Weekday keys used by worker weekly schedules, ordered like ``date.weekday()``."""

    MONDAY = "monday"
    TUESDAY = "tuesday"
    WEDNESDAY = "wednesday"
    THURSDAY = "thursday"
    FRIDAY = "friday"
    SATURDAY = "saturday"
    SUNDAY = "sunday"

    @classmethod
    def from_index(cls, index: int) -> "Weekday":
        return list(cls)[index]
