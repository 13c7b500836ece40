"""CLI Argument Parsing"""

import argparse
import argcomplete

from gic import __version__


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='gic',
        description='Generate polished git commits with AI assistance',
        epilog='Example: gic fixing the login redirect (extra words become a hint)'
    )

    parser.add_argument('-v', '--version', action='version', version=f'%(prog)s {__version__}')
    parser.add_argument('hint', nargs='*', metavar='HINT', help='Extra context for the message')

    # Workflow options
    parser.add_argument('--no-stage', action='store_true', help='Do not run "git add ." before analyzing')
    parser.add_argument('-y', '--yes', action='store_true', help='Commit without asking for confirmation')
    parser.add_argument('--dry-run', action='store_true', help='Print the generated message, do not commit')

    # LLM options
    parser.add_argument('-m', '--model', type=str, metavar='MODEL', help='Claude model name')
    parser.add_argument('--verbose', action='store_true', help='Show debug info (prompt size, timings)')

    # Setup/config
    parser.add_argument('--login', action='store_true', help='Authorize with your Claude account')
    parser.add_argument('--logout', action='store_true', help='Forget the stored login')
    parser.add_argument('--display-config', action='store_true', help='Show current configuration')
    parser.add_argument('--mcp', action='store_true', help='Run as an MCP server over stdio')

    return parser


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = build_parser()
    argcomplete.autocomplete(parser)
    args = parser.parse_args(argv)
    args.hint = ' '.join(args.hint).strip() or None
    return args
