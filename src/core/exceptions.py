"""Exceptions raised inside the sync layer. Repositories catch these at their boundary and turn them into a failed Result."""


class MiniMateError(Exception):
    """Base class for all errors raised by this package."""


class RepositoryError(MiniMateError):
    """A store could not read or write a record."""


class EncodingError(MiniMateError):
    """A record could not be converted to or from its transport representation."""


class QRCodeError(MiniMateError):
    """Text could not be encoded as a QR code."""
