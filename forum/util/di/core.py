"""Settings providers shared by every container."""

from dishka import Scope, provide

from forum.config import AuthSettings, Settings
from forum.util.di.base import ProviderBase


class ProdConfigProvider(ProviderBase):
    """Loads settings once per container from the environment and .env."""

    @provide(scope=Scope.APP)
    def provide_settings(self) -> Settings:
        """Provide application settings."""
        return Settings()

    @provide(scope=Scope.APP)
    def provide_auth_settings(self, settings: Settings) -> AuthSettings:
        """Provide the JWT, cookie and bcrypt settings."""
        return settings.auth

