"""Terminal Output Formatting Package"""

import re
import shutil
import sys
import os
import textwrap
import threading

ANSI_RE = re.compile(r'\x1b\[[0-9;]*[a-zA-Z]')


class Colors:
    """ANSI escape codes for terminal colors."""
    RESET = '\033[0m'
    BOLD = '\033[1m'
    DIM = '\033[2m'
    RED = '\033[31m'
    GREEN = '\033[32m'
    YELLOW = '\033[33m'
    CYAN = '\033[36m'


def _supports_color() -> bool:
    if os.environ.get('NO_COLOR'):
        return False
    if os.environ.get('FORCE_COLOR'):
        return True
    if not hasattr(sys.stdout, 'isatty') or not sys.stdout.isatty():
        return False
    if sys.platform == 'win32':
        try:
            import ctypes
            kernel32 = ctypes.windll.kernel32
            kernel32.SetConsoleMode(kernel32.GetStdHandle(-11), 7)
            return True
        except (AttributeError, OSError):
            return False
    return True


def _supports_unicode() -> bool:
    if sys.platform == 'win32':
        try:
            '✓'.encode(sys.stdout.encoding or 'utf-8')
            return True
        except (UnicodeEncodeError, LookupError):
            return False
    return True


COLORS_ENABLED = _supports_color()
UNICODE_ENABLED = _supports_unicode()

CHECK = '✓' if UNICODE_ENABLED else '[OK]'
CROSS = '✗' if UNICODE_ENABLED else '[X]'
WARN = '⚠' if UNICODE_ENABLED else '[!]'


def _colorize(text: str, *codes: str) -> str:
    if not COLORS_ENABLED:
        return text
    return f"{''.join(codes)}{text}{Colors.RESET}"


def info(text: str) -> str:
    return _colorize(text, Colors.CYAN)


def dim(text: str) -> str:
    return _colorize(text, Colors.DIM)


def bold(text: str) -> str:
    return _colorize(text, Colors.BOLD)


def strip_ansi(text: str) -> str:
    return ANSI_RE.sub('', text)


def clean_status(text: str) -> str:
    """Drop ANSI codes and trailing whitespace from every line."""
    return '\n'.join(strip_ansi(line).rstrip(' \t\r') for line in text.split('\n'))


def print_success(message: str) -> None:
    print(f"{_colorize(CHECK, Colors.GREEN)} {message}")


def print_error(message: str) -> None:
    print(_colorize(f"{CROSS} {message}", Colors.RED), file=sys.stderr)


def print_warning(message: str) -> None:
    """Printed to stderr, like print_error."""
    print(_colorize(f"{WARN} {message}", Colors.YELLOW), file=sys.stderr)


def print_box(text: str, title: str = "") -> None:
    """Print text inside a border, wrapping long lines to the terminal."""
    term_width = shutil.get_terminal_size((80, 24)).columns
    # Box chrome takes 4 chars: "│ " + " │"
    max_width = max(int(term_width * 0.8), 60) - 4

    wrapped_lines = []
    for line in text.split('\n'):
        if len(line) > max_width:
            indent = '  ' if line.startswith(('- ', '  ')) else ''
            wrapped_lines.extend(textwrap.wrap(line, width=max_width, subsequent_indent=indent))
        else:
            wrapped_lines.append(line)

    content_width = max([len(line) for line in wrapped_lines] + [len(title) + 2])

    if UNICODE_ENABLED:
        h, side, corners = '─', '│', ('┌', '┐', '└', '┘')
    else:
        h, side, corners = '-', '|', ('+', '+', '+', '+')

    label = f" {title} " if title else h * 2
    top = f'{corners[0]}{h}{label}{h * (content_width - len(label) + 1)}{corners[1]}'
    bottom = f'{corners[2]}{h}{h * content_width}{h}{corners[3]}'

    print(dim(top))
    for line in wrapped_lines:
        padding = ' ' * (content_width - len(line))
        print(f"{dim(side)} {line}{padding} {dim(side)}")
    print(dim(bottom))


class Spinner:
    """Animated spinner for long operations. Use as context manager."""
    FRAMES_UNICODE = ['⠋', '⠙', '⠹', '⠸', '⠼', '⠴', '⠦', '⠧', '⠇', '⠏']
    FRAMES_ASCII = ['-', '\\', '|', '/']

    def __init__(self, message: str = ""):
        self.message = message
        self._thread = None
        self._stop_event = threading.Event()
        self._frames = self.FRAMES_UNICODE if UNICODE_ENABLED else self.FRAMES_ASCII

    def _spin(self):
        idx = 0
        while not self._stop_event.is_set():
            frame = self._frames[idx % len(self._frames)]
            print(f'\r\033[K{frame} {self.message}', end='', flush=True)
            idx += 1
            self._stop_event.wait(0.08)

    def __enter__(self):
        if sys.stdout.isatty():
            self._stop_event.clear()
            self._thread = threading.Thread(target=self._spin, daemon=True)
            self._thread.start()
        return self

    def __exit__(self, *args):
        self._stop_event.set()
        if self._thread:
            self._thread.join()
        if sys.stdout.isatty():
            print('\r\033[K', end='', flush=True)


__all__ = [
    "info", "dim", "bold",
    "strip_ansi", "clean_status",
    "print_success", "print_error", "print_warning", "print_box",
    "Spinner",
]
