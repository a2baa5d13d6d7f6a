"""Terminal output helpers with colors.

Normal progress goes to stdout; warnings, errors and command traces go to stderr.
"""

import sys

# Colors
RED = "\033[0;31m"
GREEN = "\033[0;32m"
YELLOW = "\033[1;33m"
BLUE = "\033[0;34m"
GRAY = "\033[90m"
MAGENTA = "\033[0;35m"
NC = "\033[0m"


def log(msg: str) -> None:
    print(f"\r\033[K{BLUE}[gitflow]{NC} {msg}")


def success(msg: str) -> None:
    print(f"\r\033[K{GREEN}[gitflow]{NC} {msg}")


def warn(msg: str) -> None:
    print(f"\r\033[K{YELLOW}[gitflow]{NC} {msg}", file=sys.stderr)


def error(msg: str) -> None:
    print(f"\r\033[K{RED}[gitflow]{NC} {msg}", file=sys.stderr)


def trace(msg: str) -> None:
    """Echo a git invocation (verbose modes)."""
    print(f"{MAGENTA}[git]{NC} {GRAY}{msg}{NC}", file=sys.stderr)


def print_summary(actions: list[str], follow_up: list[str] | None = None) -> None:
    """Print the 'Summary of actions' block shown after every lifecycle command."""
    print()
    print("Summary of actions:")
    for action in actions:
        print(f"- {action}")
    if follow_up:
        print()
        for line in follow_up:
            print(line)
    print()
