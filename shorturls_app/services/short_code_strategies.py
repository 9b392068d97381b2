"""
Short code generation strategies for the URL registry.
Uses Strategy Pattern to allow different generation algorithms.
"""

import string
import random
from abc import ABC, abstractmethod
from typing import Callable

from shorturls_app.exceptions import GenerationExhaustedError


class ShortCodeStrategy(ABC):
    """Abstract base class for short code generation strategies"""

    @abstractmethod
    def generate(self, sequence: int, exists: Callable[[str], bool]) -> str:
        """
        Generate a short code.

        Called by the registry while it holds its key-set lock, so a code
        for which ``exists`` returns False is free to insert.

        Args:
            sequence: 1-based insertion number of the record being created
            exists: Predicate telling whether a code is already taken

        Returns:
            A short code not currently in use

        Raises:
            GenerationExhaustedError: If no free code could be produced
        """
        pass


class RandomShortCodeStrategy(ShortCodeStrategy):
    """
    Random generation strategy.
    Draws uniformly from [a-zA-Z0-9] and retries on collision.

    Pros: Simple, unpredictable
    Cons: Collision risk grows with the number of stored codes
    """

    def __init__(self, length: int = 6, max_retries: int = 10):
        self.length = length
        self.max_retries = max_retries
        self.characters = string.ascii_letters + string.digits
        self._random = random.SystemRandom()

    def generate(self, sequence: int, exists: Callable[[str], bool]) -> str:
        """Generate random short code with collision checking"""
        for attempt in range(self.max_retries):
            short_code = self._generate_random_string()

            if not exists(short_code):
                return short_code

        # If all retries failed
        raise GenerationExhaustedError(
            f"Could not generate unique short code after {self.max_retries} attempts"
        )

    def _generate_random_string(self) -> str:
        """Generate a random string of specified length"""
        return ''.join(self._random.choice(self.characters) for _ in range(self.length))


class Base62ShortCodeStrategy(ShortCodeStrategy):
    """
    Base62 encoding strategy with sequence obfuscation.
    Converts the registry insertion number (plus salt) to Base62.

    Pros: No random collisions, fast
    Cons: Predictable if salt is known; custom codes can still occupy a slot
    """

    BASE62_CHARS = "0123456789abcdefghijklmnopqrstuvwxyzABCDEFGHIJKLMNOPQRSTUVWXYZ"

    def __init__(self, salt: int = 1000, max_length: int = 6, max_retries: int = 10):
        self.salt = salt
        self.max_length = max_length
        self.max_retries = max_retries

    def generate(self, sequence: int, exists: Callable[[str], bool]) -> str:
        """
        Generate short code using Base62 encoding.

        Process:
        1. Add salt to the sequence for obfuscation
        2. Encode to Base62
        3. If the code was taken by a custom shortcode, move to the next number

        Note: If encoded string exceeds max_length, raise error.
        This indicates salt is too large for the configured length.
        """
        for offset in range(self.max_retries):
            obfuscated_id = sequence + self.salt + offset
            encoded = self._base62_encode(obfuscated_id)

            # Truncating would cause duplicates
            if len(encoded) > self.max_length:
                raise GenerationExhaustedError(
                    f"Generated code '{encoded}' exceeds max length {self.max_length}. "
                    f"Sequence: {sequence}, Obfuscated ID: {obfuscated_id}."
                )

            if not exists(encoded):
                return encoded

        raise GenerationExhaustedError(
            f"Could not generate unique short code after {self.max_retries} attempts"
        )

    def _base62_encode(self, number: int) -> str:
        """
        Convert integer to Base62 string.

        Base62 uses: 0-9 (10) + a-z (26) + A-Z (26) = 62 characters
        """
        if number == 0:
            return self.BASE62_CHARS[0]

        result = ""
        while number > 0:
            result = self.BASE62_CHARS[number % 62] + result
            number //= 62

        return result
