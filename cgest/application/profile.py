"""
Profile service - display name and avatar of the account owner.
"""
from dataclasses import replace

from cgest.domain.user import UserProfile
from cgest.infrastructure.storage.repository import Storage

DEFAULT_NAME = "Usuário Local"


class ProfileService:
    def __init__(self, storage: Storage):
        self.storage = storage

    @property
    def _profile_id(self) -> str:
        return str(self.storage.account_id)

    def get_profile(self) -> UserProfile:
        profile = self.storage.profiles.get(self._profile_id)
        if profile is None:
            return UserProfile(id=self._profile_id, name=DEFAULT_NAME)
        return profile

    def update_profile(self, **changes) -> UserProfile:
        allowed = {"email", "name", "avatar"}
        profile = replace(
            self.get_profile(),
            **{k: v for k, v in changes.items() if k in allowed},
        )
        return self.storage.profiles.upsert(profile)
