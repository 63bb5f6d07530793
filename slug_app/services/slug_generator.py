import logging
from typing import Callable, TypeVar

from slug_app.exceptions import DuplicateSlugError, ExhaustedError
from slug_app.services.slug_strategies import SlugStrategy

logger = logging.getLogger(__name__)

T = TypeVar("T")


class SlugGenerator:
    """
    Allocates slugs that are unique in the store.

    A drawn slug only counts once the store has accepted it: the caller's
    insert runs inside the retry loop and a DuplicateSlugError triggers a
    fresh draw. After max_attempts collisions the slug space is treated as
    saturated and ExhaustedError is raised.
    """

    def __init__(self, strategy: SlugStrategy, max_attempts: int = 5):
        if max_attempts < 1:
            raise ValueError("max_attempts must be at least 1")
        self.strategy = strategy
        self.max_attempts = max_attempts

    def generate(self) -> str:
        """Draw one candidate slug"""
        return self.strategy.generate()

    def assign(self, insert: Callable[[str], T]) -> T:
        """
        Draw slugs until insert accepts one.

        Args:
            insert: Persists a record under the given slug; raises
                    DuplicateSlugError when the slug is taken

        Returns:
            Whatever insert returned for the accepted slug

        Raises:
            ExhaustedError: If every attempt collided
        """
        for attempt in range(1, self.max_attempts + 1):
            slug = self.generate()
            try:
                return insert(slug)
            except DuplicateSlugError:
                logger.debug("Slug collision on %s (attempt %d/%d)", slug, attempt, self.max_attempts)

        raise ExhaustedError(self.max_attempts)
