from __future__ import annotations

from typing import Optional


class SurveyHubError(Exception):
    # Base class for domain errors.
    pass


class NotFoundError(SurveyHubError):
    """Raised when an update targets a survey or survey result that does not exist.

    The message always names the id that was requested, never a field of the
    missing document.
    """

    def __init__(self, entity: str, entity_id: str, user_id: Optional[str] = None):
        self.entity = entity
        self.entity_id = entity_id
        self.user_id = user_id
        message = f"update unexisted {entity} {entity_id}"
        if user_id is not None:
            message += f" of user {user_id}"
        super().__init__(message)
