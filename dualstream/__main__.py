#!/usr/bin/env python
"""
Entry point allowing ``python -m dualstream``.
"""

import sys
from dualstream.main import run_dualstream

if __name__ == "__main__":
    sys.exit(run_dualstream())
