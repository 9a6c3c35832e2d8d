# luxematch/domain/errors.py
from luxematch.domain.services.constants import STYLISTS_BUSY_MESSAGE


class OutfitError(Exception):
    """Base class for hard failures of one styling request."""
    kind = "outfit_error"
    status_code = 500

    def __init__(self, message: str, status_code: int | None = None):
        self.message = message
        if status_code is not None:
            self.status_code = status_code
        super().__init__(self.message)


class EmptyQuery(OutfitError):
    """Blank query; rejected before any request is issued."""
    kind = "empty_query"
    status_code = 400

    def __init__(self, message: str = "Describe the occasion you are dressing for."):
        super().__init__(message)


class RecommendationUnavailable(OutfitError):
    """Generation capability unreachable, rate-limited, or returned no text."""
    kind = "recommendation_unavailable"
    status_code = 503

    def __init__(self, message: str = STYLISTS_BUSY_MESSAGE, *, cause: str | None = None):
        self.cause = cause
        super().__init__(message)


class MalformedResponse(OutfitError):
    """Response text could not be parsed or failed schema validation."""
    kind = "malformed_response"
    status_code = 502


class RequestInProgress(OutfitError):
    kind = "request_in_progress"
    status_code = 409

    def __init__(self, session_id: str):
        self.session_id = session_id
        super().__init__(f"A styling request is already in progress for session {session_id}")


class StaleRecommendation(OutfitError):
    """The session moved on while the request was in flight; the result was dropped."""
    kind = "stale_recommendation"
    status_code = 409

    def __init__(self, session_id: str, ticket: int):
        self.session_id = session_id
        self.ticket = ticket
        super().__init__(f"Styling request {ticket} for session {session_id} was abandoned")
