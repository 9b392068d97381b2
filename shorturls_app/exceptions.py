"""
Errors raised by the URL registry and the HTTP layer.

Each error carries the message that ends up in the ``{"error": ...}`` body.
Status codes are chosen at the HTTP boundary (see main.py).
"""

from typing import Optional


class RegistryError(Exception):
    """Base class for every recoverable short URL error"""

    message = "Registry error"

    def __init__(self, message: Optional[str] = None):
        super().__init__(message or self.message)
        if message:
            self.message = message


class InvalidInputError(RegistryError):
    message = "Invalid request body or missing URL"


class ShortcodeTakenError(RegistryError):
    message = "Shortcode already exists"


class ShortcodeNotFoundError(RegistryError):
    message = "Shortcode not found"


class ShortcodeExpiredError(RegistryError):
    message = "Short URL has expired"


class InvalidPathError(RegistryError):
    message = "Invalid path"


class GenerationExhaustedError(RegistryError):
    """Raised when no free short code was found within the retry budget"""

    message = "Could not generate a unique shortcode"
