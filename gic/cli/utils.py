"""CLI Utility Functions"""

import os
import subprocess
import sys
import tempfile


def edit_message(message: str) -> str | None:
    """Open message in user's editor. Returns edited text or None on failure."""
    editor = os.environ.get('VISUAL') or os.environ.get('EDITOR')
    if not editor:
        editor = 'notepad' if sys.platform == 'win32' else 'vi'

    tmp = tempfile.NamedTemporaryFile(mode='w', suffix='.gitcommit', delete=False, encoding='utf-8')
    try:
        tmp.write(message)
        tmp.close()
        subprocess.run([editor, tmp.name], check=True)
        with open(tmp.name, 'r', encoding='utf-8') as f:
            edited = f.read().strip()
        return edited if edited else None
    except (subprocess.CalledProcessError, OSError):
        return None
    finally:
        try:
            os.unlink(tmp.name)
        except OSError as e:
            # Log to stderr so temp files don't silently accumulate
            print(f"Warning: Could not delete temp file {tmp.name}: {e}", file=sys.stderr)


def ask_confirmation(prompt: str = "Proceed with commit? [Y/n/e(dit)]: ") -> str:
    """Return 'yes', 'no' or 'edit'. Interrupts count as 'no'."""
    while True:
        try:
            choice = input(prompt).strip().lower()
        except (KeyboardInterrupt, EOFError):
            print()
            return 'no'
        if choice in ('', 'y', 'yes'):
            return 'yes'
        if choice in ('n', 'no', 'q'):
            return 'no'
        if choice in ('e', 'edit'):
            return 'edit'
        print("Enter y, n or e")
