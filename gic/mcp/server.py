"""MCP Server - Expose commit generation to MCP clients over stdio.

stdout carries protocol traffic, so diagnostics go to stderr only.
"""

import sys
from typing import Callable

from mcp.server.fastmcp import FastMCP

from gic import __version__
from gic.auth import AuthError, get_provider
from gic.config import load_config
from gic.git import GitError, GitRepository
from gic.llm import LLMError, get_client
from gic.workflow import CommitWorkflow, NoChangesError

GENERATE_DESCRIPTION = (
    "IMPORTANT: Use this tool whenever the user asks to generate a commit message, create a commit, "
    "or commit changes. Analyzes the git changes (staged and unstaged) and generates a commit message "
    "that explains WHY the changes were made, following the style of recent commits."
)

CREATE_DESCRIPTION = (
    "IMPORTANT: Use this tool whenever the user asks to commit changes or save work to git. "
    "Stages all changes and creates a commit with either the provided message or a generated one. "
    "Optionally pass user_context to guide generation (e.g. 'fixed bug in authentication')."
)


def default_workflow() -> CommitWorkflow:
    config = load_config()
    credentials = get_provider()
    return CommitWorkflow(
        repo=GitRepository(),
        client=get_client(model=config.model, max_tokens=config.max_tokens, bearer=credentials.bearer),
        credentials=credentials,
        budget=config.budget(),
        history_limit=config.history_limit,
    )


class CommitTools:
    """Tool and resource handlers, independent of the transport."""

    def __init__(self, workflow_factory: Callable[[], CommitWorkflow] = default_workflow):
        self._workflow_factory = workflow_factory

    def generate_commit_message(self, user_context: str = "") -> str:
        workflow = self._workflow_factory()
        snapshot = workflow.collect()
        return workflow.generate(snapshot, hint=user_context or None).message

    def create_commit(self, user_context: str = "", message: str = "") -> dict:
        """Stage, generate if needed, commit. Failures are reported in the payload."""
        result = {"success": False, "message": message, "commit_hash": "", "error": ""}
        try:
            workflow = self._workflow_factory()
            workflow.stage()
            if not message:
                snapshot = workflow.collect()
                result["message"] = workflow.generate(snapshot, hint=user_context or None).message
            result["commit_hash"] = workflow.commit(result["message"])
            result["success"] = True
        except (GitError, AuthError, LLMError, NoChangesError) as e:
            result["error"] = str(e)
            print(f"gic: create_commit failed: {e}", file=sys.stderr)
        return result

    def status(self) -> str:
        return self._workflow_factory().repo.status()

    def diff(self) -> str:
        return self._workflow_factory().repo.diff()

    def recent_commits(self) -> str:
        return self._workflow_factory().repo.history()


def create_server(tools: CommitTools | None = None) -> FastMCP:
    tools = tools or CommitTools()
    server = FastMCP("gic", instructions=f"gic {__version__}: AI-generated git commits")

    server.add_tool(tools.generate_commit_message, name="generate_commit_message", description=GENERATE_DESCRIPTION)
    server.add_tool(tools.create_commit, name="create_commit", description=CREATE_DESCRIPTION)

    @server.resource("git://status", name="Git Status", description="Current git repository status", mime_type="text/plain")
    def git_status() -> str:
        return tools.status()

    @server.resource("git://diff", name="Git Diff", description="Current git diff (staged and unstaged changes)", mime_type="text/plain")
    def git_diff() -> str:
        return tools.diff()

    @server.resource("git://recent-commits", name="Recent Commits", description="Recent commit history (last 10 commits)", mime_type="text/plain")
    def git_recent_commits() -> str:
        return tools.recent_commits()

    return server


def serve() -> None:
    print("Starting gic MCP server...", file=sys.stderr)
    create_server().run(transport="stdio")
