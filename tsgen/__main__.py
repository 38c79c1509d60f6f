"""Allow `python -m tsgen`."""

import sys

from .cli import main

sys.exit(main())
