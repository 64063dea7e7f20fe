"""
Persistence-related exceptions.
"""


class PersistenceUnavailable(Exception):
    """Exception raised when the user store cannot be read or written."""
    pass
