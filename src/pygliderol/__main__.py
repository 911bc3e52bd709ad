"""Allow ``python -m pygliderol``."""

import sys

from pygliderol.cli import main

sys.exit(main())
