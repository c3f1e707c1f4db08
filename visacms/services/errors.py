class CmsError(Exception):
    """Base class for record store and collection endpoint failures."""


class ValidationError(CmsError):
    """Raised when a required field or the addressing key is blank."""


class NotFoundError(CmsError):
    """Raised when no record exists for the given key."""


class ConflictError(CmsError):
    """Raised when a record with the derived key already exists."""


class StoreError(CmsError):
    """Raised when the database cannot be reached or a statement fails."""
