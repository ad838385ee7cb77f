#!/usr/bin/env python3
"""
DualStream command line interface.

Copies standard input to standard output and a log file, like ``tee``,
with optional per-destination timestamps and forced banner messages.
"""

import sys
from typing import Any, Dict, Optional

import click

from dualstream.__version__ import __version__
from dualstream.cli.config_utils import load_configuration
from dualstream.cli.console import echo_error
from dualstream.exceptions import ConfigurationError, SinkError
from dualstream.logger import configure_logger, info
from dualstream.logger import debug as log_debug
from dualstream.stream import TeeStream

# Exit status used when the reading end of stdout goes away (``| head``)
EXIT_BROKEN_PIPE = 141


def merge_options(config: Dict[str, Any], **cli_options: Any) -> Dict[str, Any]:
    """
    Combine configuration file values with command line options.

    Flags given on the command line switch a setting on; valued options
    given on the command line replace the file's value.

    Args:
        config: Values loaded from a configuration file
        **cli_options: Values parsed by click

    Returns:
        The effective settings
    """
    merged: Dict[str, Any] = {
        "log_file": None,
        "append": False,
        "timestamp_console": False,
        "timestamp_file": False,
        "encoding": "utf-8",
        "start_message": None,
        "end_message": None,
    }
    merged.update(config)

    for key, value in cli_options.items():
        if isinstance(value, bool):
            merged[key] = merged.get(key, False) or value
        elif value is not None:
            merged[key] = value
    return merged


def run_tee(settings: Dict[str, Any], stdin=None, stdout=None) -> int:
    """
    Tee ``stdin`` into ``stdout`` and the configured log file.

    Args:
        settings: Effective settings, see merge_options
        stdin: Input stream (default: sys.stdin)
        stdout: Console stream (default: sys.stdout)

    Returns:
        Exit code
    """
    stdin = stdin or sys.stdin
    stdout = stdout or sys.stdout

    mode = "a" if settings["append"] else "w"
    log_file = settings["log_file"]
    info(f"Teeing input to {log_file} (mode {mode!r})")

    try:
        f = open(log_file, mode, encoding=settings["encoding"])
    except (OSError, LookupError) as e:
        echo_error(f"Failed to open log file {log_file}: {e}")
        return 1

    with f:
        stream = TeeStream(
            stdout,
            f,
            settings["timestamp_console"],
            settings["timestamp_file"],
        )
        try:
            if settings["start_message"]:
                stream.force_message(settings["start_message"])

            lines = 0
            for line in stdin:
                stream.write(line)
                stream.flush()
                lines += 1

            if settings["end_message"]:
                stream.force_message(settings["end_message"])
            stream.flush()
        except SinkError as e:
            if isinstance(e.__cause__, BrokenPipeError):
                log_debug("Console reader went away, stopping")
                return EXIT_BROKEN_PIPE
            echo_error(str(e))
            return 1
        finally:
            stream.close()

    log_debug(f"Copied {lines} line(s)")
    return 0


@click.command(name="dualstream")
@click.argument("log_file", required=False, type=click.Path(dir_okay=False))
@click.option(
    "-a", "--append", is_flag=True, help="Append to the log file instead of overwriting."
)
@click.option(
    "--timestamp-console", is_flag=True, help="Prefix console lines with a timestamp."
)
@click.option(
    "--timestamp-file", is_flag=True, help="Prefix log file lines with a timestamp."
)
@click.option("--encoding", default=None, help="Log file encoding (default: utf-8).")
@click.option("--start-message", default=None, help="Message forced before the input.")
@click.option("--end-message", default=None, help="Message forced after the input.")
@click.option(
    "--config",
    "config_path",
    type=click.Path(dir_okay=False),
    help="YAML or JSON file with default option values.",
)
@click.option("--debug", is_flag=True, help="Enable debug diagnostics on stderr.")
@click.version_option(__version__, prog_name="dualstream")
@click.pass_context
def cli(
    ctx: click.Context,
    log_file: Optional[str],
    append: bool,
    timestamp_console: bool,
    timestamp_file: bool,
    encoding: Optional[str],
    start_message: Optional[str],
    end_message: Optional[str],
    config_path: Optional[str],
    debug: bool,
) -> None:
    """Copy standard input to standard output and LOG_FILE."""
    if debug:
        configure_logger(debug=True)

    config: Dict[str, Any] = {}
    if config_path:
        try:
            config = load_configuration(config_path, debug=debug)
        except (ConfigurationError, FileNotFoundError) as e:
            echo_error(str(e))
            ctx.exit(1)

    settings = merge_options(
        config,
        log_file=log_file,
        append=append,
        timestamp_console=timestamp_console,
        timestamp_file=timestamp_file,
        encoding=encoding,
        start_message=start_message,
        end_message=end_message,
    )

    if not settings["log_file"]:
        echo_error("No log file given on the command line or in the configuration")
        ctx.exit(1)

    ctx.exit(run_tee(settings))


if __name__ == "__main__":
    cli()
