"""CLI Commands"""

import os

from gic.auth import AuthError, TokenStore, build_auth_url, exchange_code
from gic.config import load_config, get_config_path
from gic.output import Spinner, bold, dim, info, print_box, print_error, print_success


def display_config() -> int:
    """Display current configuration."""
    config = load_config()
    config_path = get_config_path()
    store = TokenStore()

    print(f"\n{bold('Current Configuration')}\n")

    if config_path:
        print(f"  {dim('Loaded from:')} {config_path}")
    else:
        print(f"  {dim('Loaded from:')} defaults (no .gicrc found)")

    env_model = os.environ.get('GIC_MODEL')
    if env_model:
        print(f"  {dim('Environment overrides:')}")
        print(f"    GIC_MODEL={env_model}")

    print()
    print(f"  {bold('Settings:')}")
    for key, value in config.to_dict().items():
        shown = str(value).lower() if isinstance(value, bool) else str(value)
        print(f"    {key + ':':<18} {info(shown)}")

    logged_in = 'yes' if store.path.exists() else 'no'
    print(f"\n  {dim('Token file:')} {store.path} ({dim('logged in:')} {logged_in})")

    print(f"\n  {dim('Config locations:')}")
    print(f"    Local:  .gicrc (in current directory)")
    print(f"    Global: ~/.gicrc\n")

    return 0


def run_login(store: TokenStore | None = None) -> int:
    """Interactive OAuth login: open URL, paste code, store token."""
    store = store or TokenStore()
    auth_url, verifier = build_auth_url()

    print(f"\n{bold('Authentication Required')}\n")
    print("Please visit this URL to authorize:")
    print_box(auth_url, "Authorization URL")

    try:
        code = input("Paste the authorization code here (code#state): ").strip()
    except (KeyboardInterrupt, EOFError):
        code = ""

    if not code:
        print_error("Authorization cancelled")
        return 1

    try:
        with Spinner("Exchanging authorization code for token..."):
            token = exchange_code(code, verifier)
        path = store.save(token)
    except AuthError as e:
        print_error(str(e))
        return 1

    print_success(f"Authorization successful! Token saved to {path}")
    return 0


def run_logout(store: TokenStore | None = None) -> int:
    store = store or TokenStore()
    if store.delete():
        print_success(f"Removed {store.path}")
    else:
        print(dim("Not logged in."))
    return 0


def run_mcp() -> int:
    """Serve the MCP tools over stdio until the client disconnects."""
    from gic.mcp.server import serve

    serve()
    return 0
