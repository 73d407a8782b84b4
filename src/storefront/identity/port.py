"""Identity port — who is signed in, as far as checkout is concerned."""

from abc import ABC, abstractmethod
from dataclasses import dataclass


@dataclass(frozen=True)
class User:
    id: str
    email: str | None = None


class IdentityProvider(ABC):
    @abstractmethod
    def current_user(self) -> User | None:
        """Return the authenticated user, or None for an anonymous visitor."""
        ...
