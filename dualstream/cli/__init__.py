"""
DualStream Command Line Interface Package

This package contains the ``dualstream`` console command.
"""

from dualstream.cli.config_utils import load_configuration
from dualstream.cli.base import cli, merge_options, run_tee

__all__ = ["cli", "load_configuration", "merge_options", "run_tee"]
