class DatabaseError(Exception):
    """Base for all database errors."""


class NotFoundError(DatabaseError):
    """Entity not found."""


class IntegrityError(DatabaseError):
    """Foreign key or check constraint violation."""


class CapacityError(DatabaseError):
    """Every spot on the tee time is already taken."""
