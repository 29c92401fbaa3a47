"""Exceptions raised by PyFastResample."""


class DegenerateInputError(ValueError):
    """Input that cannot be resampled, such as an empty size or a non-finite scale.

    Raised before anything is uploaded to the device, so no partial output
    exists when it propagates.
    """


__all__ = ["DegenerateInputError"]
