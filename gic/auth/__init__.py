"""Credential Provider Package"""

import os
from abc import ABC, abstractmethod

from gic.auth.token import AuthError, Token, TokenStore, default_token_path
from gic.auth.oauth import build_auth_url, exchange_code, generate_pkce, refresh


class CredentialProvider(ABC):
    """Supplies a token good for the duration of one request."""

    #: True when current_token() returns an OAuth bearer token, False for API keys
    bearer: bool = True

    @abstractmethod
    def current_token(self) -> str:
        pass


class OAuthCredentialProvider(CredentialProvider):
    """Reads the stored OAuth token, refreshing and persisting it when expired."""

    def __init__(self, store: TokenStore | None = None, refresher=refresh):
        self.store = store or TokenStore()
        self._refresh = refresher

    def current_token(self) -> str:
        token = self.store.load()
        if token is None:
            raise AuthError("Not logged in. Run: gic --login")

        if not token.is_valid():
            token = self._refresh(token)
            self.store.save(token)

        return token.access_token


class EnvCredentialProvider(CredentialProvider):
    """Uses ANTHROPIC_API_KEY from the environment."""

    bearer = False
    ENV_VAR = "ANTHROPIC_API_KEY"

    def current_token(self) -> str:
        key = os.environ.get(self.ENV_VAR)
        if not key:
            raise AuthError(f"{self.ENV_VAR} is not set")
        return key


def get_provider(store: TokenStore | None = None) -> CredentialProvider:
    """Stored OAuth login wins; fall back to an API key from the environment."""
    store = store or TokenStore()
    if not store.path.exists() and os.environ.get(EnvCredentialProvider.ENV_VAR):
        return EnvCredentialProvider()
    return OAuthCredentialProvider(store)


__all__ = [
    "AuthError",
    "Token",
    "TokenStore",
    "CredentialProvider",
    "OAuthCredentialProvider",
    "EnvCredentialProvider",
    "get_provider",
    "default_token_path",
    "build_auth_url",
    "exchange_code",
    "generate_pkce",
    "refresh",
]
