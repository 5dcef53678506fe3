"""Resolution of the caller's health profile from a bearer token."""

import logging
from dataclasses import dataclass
from typing import Protocol

from mealvista.domain.profiles import UserHealthProfile

_logger = logging.getLogger(__name__)

_BEARER_PREFIX = "bearer "


class ProfileRepository(Protocol):
    """Read-only access to user identities and health profiles."""

    def get_user_id(self, access_token: str) -> str | None:
        """Return the user id for an access token, if valid."""

    def get_profile(self, user_id: str) -> UserHealthProfile | None:
        """Return the stored health profile for a user, if present."""


@dataclass
class ProfileService:
    """Looks up the profile behind an optional Authorization header."""

    repository: ProfileRepository

    def resolve(self, authorization: str | None) -> UserHealthProfile | None:
        """Return the caller's profile, or None for anonymous callers.

        Invalid tokens and lookup failures are treated as anonymous.
        """
        token = _extract_token(authorization)
        if token is None:
            return None
        try:
            user_id = self.repository.get_user_id(token)
            if user_id is None:
                return None
            profile = self.repository.get_profile(user_id)
        except Exception:
            _logger.warning(
                "Profile lookup failed, using default profile", exc_info=True
            )
            return None
        if profile is not None:
            _logger.info(
                "Using profile for user %s (bmi_category=%s, goal=%s)",
                user_id,
                profile.bmi_category,
                profile.health_goal,
            )
        return profile


def _extract_token(authorization: str | None) -> str | None:
    if not authorization:
        return None
    value = authorization.strip()
    if value.lower().startswith(_BEARER_PREFIX):
        value = value[len(_BEARER_PREFIX) :].strip()
    return value or None
