"""Allow ``python -m sangria``."""

import sys

from sangria.cli import main

sys.exit(main())
