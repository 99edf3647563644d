"""Short code generation utilities."""

import random
import string
from typing import Optional

from .common.validators import CODE_LENGTH


class CodeGenerator:
    """Generate random short codes."""

    # 63 characters: digits, upper case, underscore, lower case
    ALPHABET = string.digits + string.ascii_uppercase + "_" + string.ascii_lowercase

    def __init__(self, length: int = CODE_LENGTH, rng: Optional[random.Random] = None):
        """Initialize short code generator.

        Args:
            length: Length of generated codes
            rng: Random source to draw from. A fresh instance seeded from OS
                entropy is used when not given; pass a seeded
                ``random.Random`` for reproducible sequences.
        """
        if length < 1:
            raise ValueError("Code length must be positive")
        self.length = length
        self.rng = rng or random.Random()

    def generate(self) -> str:
        """Generate a random short code.

        Returns:
            Code of ``length`` characters drawn uniformly from ALPHABET
        """
        return ''.join(self.rng.choices(self.ALPHABET, k=self.length))
