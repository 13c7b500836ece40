"""CLI Main Entry Point"""

import os
import sys
import time

from gic.auth import AuthError, get_provider
from gic.config import load_config
from gic.git import GitError, GitRepository
from gic.llm import LLMError, get_client
from gic.output import Spinner, bold, clean_status, dim, info, print_box, print_error, print_success, print_warning
from gic.workflow import CommitWorkflow, NoChangesError

from gic.cli.args import parse_args
from gic.cli.commands import display_config, run_login, run_logout, run_mcp
from gic.cli.utils import ask_confirmation, edit_message


def _handle_subcommands(args):
    """Handle subcommands that exit early.

    Returns:
        tuple: (exit_code, should_exit) - exit_code if should_exit is True
    """
    if args.login:
        return run_login(), True
    if args.logout:
        return run_logout(), True
    if args.display_config:
        return display_config(), True
    if args.mcp:
        return run_mcp(), True
    return 0, False


def _resolve_model(args, config):
    """Precedence: CLI args > environment variables > config file"""
    return args.model or os.environ.get('GIC_MODEL') or config.model


def _build_workflow(args, config) -> CommitWorkflow:
    credentials = get_provider()
    client = get_client(model=_resolve_model(args, config), max_tokens=config.max_tokens, bearer=credentials.bearer)
    return CommitWorkflow(
        repo=GitRepository(),
        client=client,
        credentials=credentials,
        budget=config.budget(),
        history_limit=config.history_limit,
    )


def _print_verbose_stats(args, is_pipe, generated, timings):
    """Print verbose timing and size statistics."""
    if not args.verbose or is_pipe:
        return
    prompt = generated.prompt
    print(dim(f"  Prompt: ~{len(prompt)//4} tokens ({len(prompt)} chars)"))
    print(dim(f"  Smart diff selection: {'yes' if generated.smart_diff else 'no'}"))
    print(dim(f"  Response: {generated.response.tokens_used} tokens"))
    print(dim("  Timings: " + ", ".join(f"{k}={v:.2f}s" for k, v in timings.items())))


def _confirm_and_commit(workflow, message, args, config) -> int:
    """Show the proposed message, confirm, commit."""
    print_box(f"\n{message}\n", "Proposed Commit Message")

    if config.confirm and not args.yes:
        while True:
            action = ask_confirmation()
            if action == 'no':
                print(dim("Commit cancelled."))
                return 1
            if action == 'edit':
                message = edit_message(message) or message
                print_box(f"\n{message}\n", "Proposed Commit Message")
                continue
            break

    with Spinner("Creating commit..."):
        commit_hash = workflow.commit(message)
    print_success(f"Commit created! {dim(commit_hash)}" if commit_hash else "Commit created!")
    return 0


def _generate_commit_flow(args, config) -> int:
    """Main commit generation flow.

    Returns:
        int: Exit code
    """
    is_pipe = not sys.stdout.isatty()
    timings = {}

    workflow = _build_workflow(args, config)

    if config.auto_stage and not args.no_stage:
        t0 = time.time()
        with Spinner("Staging all changes..."):
            workflow.stage()
        timings['stage'] = time.time() - t0

    t0 = time.time()
    with Spinner("Analyzing repository changes..."):
        snapshot = workflow.collect()
    timings['collect'] = time.time() - t0

    if not snapshot.has_changes:
        print("No changes to commit", file=sys.stderr if is_pipe else sys.stdout)
        return 0

    if not is_pipe:
        print_box(f"\n{clean_status(snapshot.status)}", "Repository Status")
        print(f"Analyzing {bold(str(len(snapshot.changes)))} files "
              f"({info(f'+{snapshot.total_added} -{snapshot.total_removed}')}) using {info(workflow.client.name)}")
        if workflow.builder.uses_selected_diffs(snapshot):
            print_warning("Large changeset detected, selecting most relevant files...")

    t0 = time.time()
    with Spinner("Generating commit message..."):
        generated = workflow.generate(snapshot, hint=args.hint)
    timings['generate'] = time.time() - t0

    _print_verbose_stats(args, is_pipe, generated, timings)

    # Pipe mode: output raw message and never commit
    if is_pipe or args.dry_run:
        print(generated.message)
        return 0

    return _confirm_and_commit(workflow, generated.message, args, config)


def main(argv: list[str] | None = None) -> int:
    """Main entry point for the CLI."""
    args = parse_args(argv)

    exit_code, should_exit = _handle_subcommands(args)
    if should_exit:
        return exit_code

    config = load_config()

    try:
        return _generate_commit_flow(args, config)
    except NoChangesError as e:
        print(str(e))
        return 0
    except (GitError, AuthError, LLMError) as e:
        print_error(str(e))
        return 1
    except KeyboardInterrupt:
        print()
        print(dim("Cancelled."))
        return 130


if __name__ == "__main__":
    sys.exit(main())
