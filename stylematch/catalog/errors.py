from __future__ import annotations


class CatalogError(Exception):
    """Base class for catalog failures."""


class StylistNotFoundError(CatalogError):
    def __init__(self, stylist_id: str) -> None:
        super().__init__(f"Stylist not found: {stylist_id}")
        self.stylist_id = stylist_id


class StylistAlreadyExistsError(CatalogError):
    def __init__(self, stylist_id: str) -> None:
        super().__init__(f"Stylist already onboarded: {stylist_id}")
        self.stylist_id = stylist_id


class StaleRatingError(CatalogError):
    """Raised when a rating write carries a version that is no longer current.

    Callers re-read the rating and retry; the catalog never merges writes.
    """

    def __init__(self, stylist_id: str, expected: int, actual: int) -> None:
        super().__init__(
            f"Stale rating for stylist {stylist_id}: expected version {expected}, found {actual}"
        )
        self.stylist_id = stylist_id
        self.expected = expected
        self.actual = actual
