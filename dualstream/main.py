#!/usr/bin/env python

"""
Main entry point for the dualstream command-line tool.
"""

import sys
from typing import List, Optional

import click

from dualstream.cli.base import cli
from dualstream.cli.console import echo_error
from dualstream.logger import error, setup_application_logging


def run_dualstream(args: Optional[List[str]] = None) -> int:
    """
    Run the dualstream CLI and turn its outcome into an exit status.

    Args:
        args: Command line arguments (default: sys.argv[1:])

    Returns:
        Exit code
    """
    argv = sys.argv[1:] if args is None else args
    setup_application_logging(debug="--debug" in argv)

    try:
        return cli.main(args=args, prog_name="dualstream", standalone_mode=False) or 0
    except click.ClickException as e:
        e.show()
        return e.exit_code
    except click.Abort:
        echo_error("Aborted")
        return 1
    except Exception as e:
        error(f"Unexpected {type(e).__name__}: {e}", exc_info=True)
        return 1


if __name__ == "__main__":
    sys.exit(run_dualstream())
