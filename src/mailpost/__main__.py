#!/usr/bin/env python3
"""Run the mailpost CLI with ``python -m mailpost``, e.g.::

    python -m mailpost send "Weekend in the hills.post"
"""

import sys

from mailpost.cli import main

if __name__ == "__main__":
    sys.exit(main())
