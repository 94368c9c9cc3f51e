"""
Error taxonomy for the data-access layer.

Each error carries the status code an HTTP or RPC layer should map it to.
Store failures (SQLAlchemy DBAPIError and friends) are not part of this
hierarchy and propagate unchanged.
"""


class JoblyError(Exception):
    """Base class for errors raised by this layer."""

    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(JoblyError):
    """Caller supplied no usable data; fixable by correcting the input."""

    status_code = 400


class NotFoundError(JoblyError):
    """Target record does not exist."""

    status_code = 404
