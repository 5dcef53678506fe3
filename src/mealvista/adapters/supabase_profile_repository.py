"""Supabase-backed health profile repository."""

from dataclasses import dataclass

from supabase import Client

from mealvista.domain.profiles import HealthGoal, UserHealthProfile
from mealvista.services.profiles import ProfileRepository


@dataclass
class SupabaseProfileRepository(ProfileRepository):
    """Supabase implementation for reading user health profiles."""

    client: Client

    def get_user_id(self, access_token: str) -> str | None:
        """Return the user id for a Supabase access token, if valid."""
        response = self.client.auth.get_user(access_token)
        if response is None or response.user is None:
            return None
        return str(response.user.id)

    def get_profile(self, user_id: str) -> UserHealthProfile | None:
        """Return the stored health profile for a user, if present."""
        response = (
            self.client.table("profiles")
            .select("dietary_preferences, allergens, bmi, bmi_category, health_goal")
            .eq("id", user_id)
            .eq("is_deleted", False)
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        row = response.data[0]
        goal = row.get("health_goal")
        return UserHealthProfile(
            dietary_preferences=row.get("dietary_preferences") or [],
            allergens=row.get("allergens") or [],
            bmi=row.get("bmi"),
            bmi_category=row.get("bmi_category"),
            health_goal=HealthGoal(goal) if goal else HealthGoal.MAINTENANCE,
        )
