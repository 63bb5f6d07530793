"""
Slug generation strategies.
Uses Strategy Pattern to allow different drawing algorithms.
"""

import random
import secrets
import string
from abc import ABC, abstractmethod
from typing import Optional

# Letters and digits only, so a slug never needs escaping in a path segment
BASE62_ALPHABET = string.ascii_letters + string.digits
MIN_SLUG_LENGTH = 6


class SlugStrategy(ABC):
    """Abstract base class for slug drawing strategies"""

    def __init__(self, length: int = 8):
        if length < MIN_SLUG_LENGTH:
            raise ValueError(
                f"Slug length {length} is below the minimum of {MIN_SLUG_LENGTH}"
            )
        self.length = length
        self.alphabet = BASE62_ALPHABET

    @abstractmethod
    def generate(self) -> str:
        """
        Draw one candidate slug.

        Uniqueness is not checked here; see SlugGenerator.
        """
        pass


class RandomSlugStrategy(SlugStrategy):
    """
    Base62 slugs from a random.Random instance.

    Pass a seed (or your own Random) to get a reproducible sequence in tests.
    """

    def __init__(
        self,
        length: int = 8,
        seed: Optional[int] = None,
        rng: Optional[random.Random] = None
    ):
        super().__init__(length)
        self.rng = rng or random.Random(seed)

    def generate(self) -> str:
        return ''.join(self.rng.choice(self.alphabet) for _ in range(self.length))


class SecureSlugStrategy(SlugStrategy):
    """Base62 slugs from the OS CSPRNG, so they cannot be predicted"""

    def generate(self) -> str:
        return ''.join(secrets.choice(self.alphabet) for _ in range(self.length))
