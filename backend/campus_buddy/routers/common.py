"""Translate lifecycle failures into HTTP errors for the JSON API."""
from fastapi import HTTPException, status

from campus_buddy.services.outcomes import Failure, Outcome

FAILURE_STATUS = {
    Failure.no_session: status.HTTP_401_UNAUTHORIZED,
    Failure.expired: status.HTTP_401_UNAUTHORIZED,
    Failure.invalid_credentials: status.HTTP_401_UNAUTHORIZED,
    Failure.unauthorized: status.HTTP_403_FORBIDDEN,
    Failure.not_found: status.HTTP_404_NOT_FOUND,
    Failure.event_not_found: status.HTTP_404_NOT_FOUND,
    Failure.already_joined: status.HTTP_409_CONFLICT,
    Failure.duplicate_pending: status.HTTP_409_CONFLICT,
    Failure.already_resolved: status.HTTP_409_CONFLICT,
    Failure.email_in_use: status.HTTP_409_CONFLICT,
    Failure.self_request: status.HTTP_400_BAD_REQUEST,
}

FAILURE_DETAIL = {
    Failure.unauthorized: "You do not own this resource",
    Failure.not_found: "Not found",
    Failure.event_not_found: "Event not found",
    Failure.already_joined: "You have already joined this event",
    Failure.duplicate_pending: "A buddy request to this user is already pending",
    Failure.already_resolved: "This buddy request has already been answered",
    Failure.self_request: "You cannot send a buddy request to yourself",
    Failure.email_in_use: "Email already in use.",
    Failure.invalid_credentials: "Invalid email or password",
}


def unwrap(outcome: Outcome):
    """Return the outcome's value or raise the matching HTTPException."""
    if outcome.ok:
        return outcome.value
    raise HTTPException(
        status_code=FAILURE_STATUS[outcome.failure],
        detail={"error": outcome.failure.value, "message": FAILURE_DETAIL.get(outcome.failure, "")},
    )
