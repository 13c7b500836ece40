"""OAuth (PKCE) flow against the Claude authorization server."""

import base64
import hashlib
import json
import secrets
import urllib.error
import urllib.parse
import urllib.request
from dataclasses import dataclass

from gic.auth.token import AuthError, Token

CLIENT_ID = "9d1c250a-e61b-44d9-88ed-5944d1962f5e"
AUTHORIZE_URL = "https://claude.ai/oauth/authorize"
CONSOLE_AUTHORIZE_URL = "https://console.anthropic.com/oauth/authorize"
TOKEN_URL = "https://console.anthropic.com/v1/oauth/token"
REDIRECT_URI = "https://console.anthropic.com/oauth/code/callback"
SCOPE = "org:create_api_key user:profile user:inference"
DEFAULT_TIMEOUT = 30


@dataclass
class PKCE:
    verifier: str
    challenge: str


def _b64url(data: bytes) -> str:
    return base64.urlsafe_b64encode(data).rstrip(b'=').decode('ascii')


def generate_pkce() -> PKCE:
    verifier = _b64url(secrets.token_bytes(32))
    challenge = _b64url(hashlib.sha256(verifier.encode('ascii')).digest())
    return PKCE(verifier=verifier, challenge=challenge)


def build_auth_url(use_console: bool = False) -> tuple[str, str]:
    """Return (authorization URL, PKCE verifier)."""
    pkce = generate_pkce()
    params = {
        "code": "true",
        "client_id": CLIENT_ID,
        "response_type": "code",
        "redirect_uri": REDIRECT_URI,
        "scope": SCOPE,
        "state": pkce.verifier,
        "code_challenge": pkce.challenge,
        "code_challenge_method": "S256",
    }
    base = CONSOLE_AUTHORIZE_URL if use_console else AUTHORIZE_URL
    return f"{base}?{urllib.parse.urlencode(params)}", pkce.verifier


def _post_json(url: str, payload: dict, action: str) -> dict:
    """POST a JSON payload and decode the JSON reply."""
    data = json.dumps(payload).encode('utf-8')
    req = urllib.request.Request(url, data=data, headers={"Content-Type": "application/json"})
    try:
        with urllib.request.urlopen(req, timeout=DEFAULT_TIMEOUT) as response:
            return json.loads(response.read().decode('utf-8'))
    except urllib.error.HTTPError as e:
        body = e.read().decode('utf-8', errors='replace')
        raise AuthError(f"{action} failed ({e.code} {e.reason}): {body}")
    except urllib.error.URLError as e:
        raise AuthError(f"{action} failed: {e.reason}")
    except json.JSONDecodeError:
        raise AuthError(f"{action} failed: invalid response from {url}")


def exchange_code(auth_code: str, verifier: str) -> Token:
    """Trade a pasted 'code#state' string for a token."""
    parts = auth_code.strip().split('#')
    if len(parts) != 2:
        raise AuthError("Invalid code format, expected: code#state")
    code, state = parts

    payload = {
        "code": code,
        "state": state,
        "grant_type": "authorization_code",
        "client_id": CLIENT_ID,
        "redirect_uri": REDIRECT_URI,
        "code_verifier": verifier,
    }
    return Token.from_dict(_post_json(TOKEN_URL, payload, "Token exchange"))


def refresh(token: Token) -> Token:
    if not token.refresh_token:
        raise AuthError("Token expired and has no refresh token. Run: gic --login")
    payload = {
        "grant_type": "refresh_token",
        "client_id": CLIENT_ID,
        "refresh_token": token.refresh_token,
    }
    return Token.from_dict(_post_json(TOKEN_URL, payload, "Token refresh"))
