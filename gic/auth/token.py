"""OAuth token model and on-disk store."""

import json
import os
import time
from dataclasses import dataclass, asdict
from pathlib import Path
from typing import Optional

EXPIRY_BUFFER_SECONDS = 60


class AuthError(Exception):
    """Raised when credentials cannot be obtained, refreshed or stored."""
    pass


@dataclass
class Token:
    access_token: str
    refresh_token: str = ""
    expires_in: int = 0
    expires_at: int = 0

    def is_valid(self, now: float | None = None) -> bool:
        """True while more than a minute of lifetime remains."""
        now = time.time() if now is None else now
        return now < self.expires_at - EXPIRY_BUFFER_SECONDS

    def to_dict(self) -> dict:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: dict) -> 'Token':
        if not data.get('access_token'):
            raise AuthError("Token response has no access_token")
        valid_keys = {f.name for f in cls.__dataclass_fields__.values()}
        token = cls(**{k: v for k, v in data.items() if k in valid_keys})
        if not token.expires_at and token.expires_in:
            token.expires_at = int(time.time()) + int(token.expires_in)
        return token


def default_token_path() -> Path:
    """~/.config/gic/tokens.json, or $GIC_CONFIG_DIR/tokens.json."""
    base = os.environ.get('GIC_CONFIG_DIR')
    if base:
        return Path(base) / "tokens.json"
    config_home = os.environ.get('XDG_CONFIG_HOME') or Path.home() / ".config"
    return Path(config_home) / "gic" / "tokens.json"


class TokenStore:
    """Loads and saves a single token as JSON."""

    def __init__(self, path: Path | None = None):
        self.path = Path(path) if path else default_token_path()

    def load(self) -> Optional[Token]:
        """Return the stored token, or None if nothing is stored yet."""
        if not self.path.exists():
            return None
        try:
            with open(self.path, 'r', encoding='utf-8') as f:
                return Token.from_dict(json.load(f))
        except (json.JSONDecodeError, OSError) as e:
            raise AuthError(f"Could not read token file {self.path}: {e}")

    def save(self, token: Token) -> Path:
        try:
            self.path.parent.mkdir(mode=0o700, parents=True, exist_ok=True)
            fd = os.open(self.path, os.O_WRONLY | os.O_CREAT | os.O_TRUNC, 0o600)
            with os.fdopen(fd, 'w', encoding='utf-8') as f:
                json.dump(token.to_dict(), f, indent=2)
        except OSError as e:
            raise AuthError(f"Could not save token to {self.path}: {e}")
        return self.path

    def delete(self) -> bool:
        """Remove the stored token. Returns False if there was none."""
        try:
            self.path.unlink()
            return True
        except FileNotFoundError:
            return False
