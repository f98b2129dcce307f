# core/exceptions.py


class BookNestError(Exception):
    """Base class for errors raised by BookNest collaborators."""


class DataServiceError(BookNestError):
    """A read or write against the data service failed."""


class NotFoundError(BookNestError):
    """The requested record does not exist."""


class StorageError(BookNestError):
    """An object storage operation failed."""


class ObjectExistsError(StorageError):
    """Upload target already exists and overwrite was not requested."""

    def __init__(self, bucket: str, path: str):
        super().__init__("The resource already exists")
        self.bucket = bucket
        self.path = path


class AuthError(BookNestError):
    """A token could not be issued, validated or revoked."""


class ValidationError(BookNestError):
    """Submitted data failed validation."""
