"""
Error taxonomy for the slug lifecycle.

ValidationError and NotFoundError are user-facing and are translated into
structured payloads by the exception handlers in main.py.
DuplicateSlugError is internal and never leaves SlugGenerator.
ExhaustedError is fatal and is reported as an internal error.
"""


class SlugAppError(Exception):
    """Base class for all slug shortener errors"""


class ValidationError(SlugAppError):
    """The submitted URL was rejected by the validator"""

    def __init__(self, reason: str):
        super().__init__(reason)
        self.reason = reason


class NotFoundError(SlugAppError):
    """No live record exists for the slug"""

    def __init__(self, slug: str, message: str = "Not found"):
        super().__init__(f"{message}: {slug}")
        self.slug = slug
        self.message = message


class DuplicateSlugError(SlugAppError):
    """The store already holds a record with this slug"""

    def __init__(self, slug: str):
        super().__init__(f"Slug already taken: {slug}")
        self.slug = slug


class ExhaustedError(SlugAppError):
    """No free slug was found within the allowed number of attempts"""

    def __init__(self, attempts: int):
        super().__init__(
            f"Could not generate unique slug after {attempts} attempts"
        )
        self.attempts = attempts
