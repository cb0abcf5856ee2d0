"""Domain exceptions raised by the review store and input parsing."""


class ReviewError(Exception):
    """Base exception for all review service errors."""

    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(ReviewError):
    """Client input is missing, has the wrong type, or is out of range."""

    status_code = 400


class ReviewNotFoundError(ReviewError):
    """No review has the requested id."""

    status_code = 404

    def __init__(self, review_id: int, message: str = "Reseña no encontrada"):
        super().__init__(message)
        self.review_id = review_id


class StorageError(ReviewError):
    """The storage document could not be written."""

    status_code = 500
