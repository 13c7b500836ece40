"""
gic - Git Intelligent Commit

AI-powered commit messages from the working tree, kept inside a prompt budget.
"""

__version__ = "1.0.0"

# Lock files excluded from every diff sent to the model - single source of truth
# Used by: git/repository.py (pathspec excludes), tests
LOCK_FILES = (
    'package-lock.json',
    'yarn.lock',
    'pnpm-lock.yaml',
    'Gemfile.lock',
    'Cargo.lock',
    'go.sum',
    'composer.lock',
    'Pipfile.lock',
    'poetry.lock',
    'mix.lock',
    'pubspec.lock',
    'Podfile.lock',
    'packages.lock.json',
    'paket.lock',
)

# Budget defaults. 500K chars is roughly 125K tokens at 4 chars/token,
# leaving room for the system prompt and the response.
MAX_PROMPT_CHARS = 500_000
PROMPT_OVERHEAD = 2_000
PER_LINE_ESTIMATE = 5
HISTORY_LIMIT = 10
