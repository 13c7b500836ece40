"""Shared fakes for the repository, model and credentials."""

import pytest

from gic.auth import CredentialProvider
from gic.git import FileChange
from gic.llm import LLMClient, LLMResponse


class FakeRepo:
    """In-memory stand-in for GitRepository."""

    def __init__(self, status="On branch main\n", diff="", history="abc123 Initial commit\n",
                 staged=None, unstaged=None, selected_diff="diff --git a/x b/x\n+selected\n"):
        self._status = status
        self._diff = diff
        self._history = history
        self._staged = staged or []
        self._unstaged = unstaged or []
        self.selected_diff = selected_diff
        self.diff_files_calls = []
        self.added = []
        self.commits = []

    def status(self):
        return self._status

    def diff(self):
        return self._diff

    def diff_stat(self, staged):
        source = self._staged if staged else self._unstaged
        return [FileChange(c.path, c.added, c.removed) for c in source]

    def diff_files(self, paths):
        self.diff_files_calls.append(list(paths))
        return self.selected_diff

    def history(self, limit=10):
        return self._history

    def add(self, *paths):
        self.added.append(paths)

    def commit(self, message):
        self.commits.append(message)

    def head_hash(self):
        return "deadbee" if self.commits else ""


class FakeClient(LLMClient):
    def __init__(self, reply="Fix session expiry check so users stay logged in"):
        self.reply = reply
        self.calls = []

    @property
    def name(self):
        return "Fake"

    def ask(self, token, prompt):
        self.calls.append((token, prompt))
        return LLMResponse(content=self.reply, model="fake", tokens_used=42)


class FakeCredentials(CredentialProvider):
    def __init__(self, token="tok-123"):
        self.token = token

    def current_token(self):
        return self.token


@pytest.fixture
def fake_repo():
    return FakeRepo(
        diff="diff --git a/src/app.py b/src/app.py\n+print('hi')\n",
        staged=[FileChange("src/app.py", 1, 0)],
    )


@pytest.fixture
def fake_client():
    return FakeClient()


@pytest.fixture
def fake_credentials():
    return FakeCredentials()
