#
# Copyright 2026 portalpub Project Authors. All rights reserved.
# Use of this source code is governed by a MIT-style
# license that can be found at
#
# https://opensource.org/license/MIT
#
# The above copyright notice and this permission
# notice shall be included in all copies or
# substantial portions of the Software.

"""
Terminal output helpers.

Progress goes to stdout, errors to stderr. Colors are only emitted when the
stream is a terminal.
"""

import sys


class Colors:
    """ANSI color codes for terminal output."""
    OKBLUE = '\033[94m'
    OKGREEN = '\033[92m'
    WARNING = '\033[93m'
    FAIL = '\033[91m'
    ENDC = '\033[0m'
    BOLD = '\033[1m'


def _paint(text, color, stream):
    if hasattr(stream, 'isatty') and stream.isatty():
        return f"{color}{text}{Colors.ENDC}"
    return text


def print_step(message):
    """Print a step message."""
    out = sys.stdout
    print(_paint(f"\n>>> {message}", Colors.OKBLUE + Colors.BOLD, out), file=out)


def print_info(message):
    """Print a progress line."""
    print(f"\t{message}")


def print_success(message):
    """Print a success message."""
    out = sys.stdout
    print(_paint(f"✓ {message}", Colors.OKGREEN, out), file=out)


def print_warning(message):
    """Print a warning message."""
    out = sys.stdout
    print(_paint(f"⚠ {message}", Colors.WARNING, out), file=out)


def print_error(message):
    """Print an error message."""
    err = sys.stderr
    print(_paint(f"✗ {message}", Colors.FAIL, err), file=err)
