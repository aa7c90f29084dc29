class TourAppError(Exception):
    """Base error for the tour and rating services."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class NotFoundError(TourAppError):
    """A referenced tour, package or tour rating does not exist."""


class RatingConflictError(TourAppError):
    """The customer has already rated this tour."""
