"""Exceptions raised by the partner card package."""


class ImportValidationError(ValueError):
    """An imported file is not a partner card; ``str(exc)`` is shown to the user."""


class UnsupportedLogoError(ValueError):
    """The logo could not be decoded as a PNG or JPEG image."""
