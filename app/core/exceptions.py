# medhub/app/core/exceptions.py


class InvalidInput(ValueError):
    """Raised when a helper is called without the input it needs."""


class SlugGenerationError(RuntimeError):
    """Raised when no free slug is found within the allowed number of attempts."""
