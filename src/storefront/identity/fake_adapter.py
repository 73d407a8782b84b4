"""Identity provider holding a fixed user, for development and testing."""

from storefront.identity.port import IdentityProvider, User


class StaticIdentityProvider(IdentityProvider):
    def __init__(self, user: User | None = None) -> None:
        self.user = user

    def sign_in(self, user: User) -> None:
        self.user = user

    def sign_out(self) -> None:
        self.user = None

    def current_user(self) -> User | None:
        return self.user
