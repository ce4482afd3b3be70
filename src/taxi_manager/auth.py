from __future__ import annotations

from typing import Protocol

from taxi_manager.models import User


class Authenticator(Protocol):
    """Common sign-in interface for the dashboard session."""

    def authenticate(self, email: str, password: str) -> User:
        ...


class DemoAuthenticator:
    """Test double: accepts any credentials and returns a fixed manager profile."""

    def __init__(
        self,
        user_id: str = "admin-1",
        name: str = "Alex Thompson",
        role: str = "Corporate Manager",
        avatar: str = "https://images.unsplash.com/photo-1472099645785-5658abf4ff4e?w=100&h=100&fit=crop",
    ) -> None:
        self.user_id = user_id
        self.name = name
        self.role = role
        self.avatar = avatar

    def authenticate(self, email: str, password: str) -> User:
        return User(
            id=self.user_id,
            name=self.name,
            email=email or "admin@taximanager.com",
            role=self.role,
            avatar=self.avatar,
        )
