"""Short code generation utilities."""

import random
import string
import time
from typing import Optional


def _char_range(first: str, last: str) -> str:
    return "".join(chr(c) for c in range(ord(first), ord(last)))


# Alphabet produced by exclusive upper bounds: lacks '9', 'Z' and 'z'.
LEGACY_ALPHABET = _char_range("0", "9") + _char_range("A", "Z") + _char_range("a", "z")

# Base62 characters: digits, then upper case, then lower case
BASE62_CHARS = string.digits + string.ascii_uppercase + string.ascii_lowercase


class ShortCodeGenerator:
    """Generate random short codes from a fixed alphabet.

    The random source is created once per generator and lives as long as the
    process does. It is not cryptographically secure: codes are identifiers,
    not secrets.
    """

    def __init__(
        self,
        default_length: int = 6,
        alphabet: str = BASE62_CHARS,
        seed: Optional[int] = None,
    ):
        """Initialize short code generator.

        Args:
            default_length: Length used when a caller asks for length <= 0
            alphabet: Characters codes are drawn from
            seed: Optional seed (defaults to the current time in nanoseconds)
        """
        if default_length <= 0:
            raise ValueError("default_length must be positive")
        if not alphabet:
            raise ValueError("alphabet must not be empty")

        self.default_length = default_length
        self.alphabet = alphabet
        self._rng = random.Random(seed if seed is not None else time.time_ns())

    def generate(self, length: int = 0) -> str:
        """Generate a random short code.

        Args:
            length: Length of the code (uses default if <= 0)

        Returns:
            Random short code
        """
        if length <= 0:
            length = self.default_length
        return "".join(self._rng.choices(self.alphabet, k=length))

    def is_valid_format(self, code: str) -> bool:
        """Check that every character of code belongs to the alphabet."""
        return bool(code) and all(c in self.alphabet for c in code)
