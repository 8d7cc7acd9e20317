from __future__ import annotations

from ..domain.models import SearchPreference


class MatchingEngineError(Exception):
    """Raised by a matching engine when a register/evaluate/delete call fails."""


class UnsupportedQueryError(MatchingEngineError):
    """The in-memory engine was handed a clause it cannot evaluate."""


class PartialRegistrationFailure(Exception):
    """The preference was stored but its query could not be registered.

    The stored record is left in place; ``preference`` carries it so the
    caller can report or repair the orphan.
    """

    def __init__(self, preference: SearchPreference, cause: Exception) -> None:
        super().__init__(
            f"Search preference {preference.id} was saved but its query "
            f"could not be registered: {cause}"
        )
        self.preference = preference
        self.cause = cause


class EngineUnavailable(Exception):
    """The matching engine failed while evaluating a book."""
