"""Allow running with `python -m develevate`."""

import sys

from .main import main

sys.exit(main())
