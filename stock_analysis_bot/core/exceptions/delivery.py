"""
Delivery-related exceptions.
"""


class InvalidArgumentError(ValueError):
    """Exception raised when the segmenter is called with a bad chunk size."""
    pass
