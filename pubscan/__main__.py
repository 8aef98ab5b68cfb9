"""Allow `python -m pubscan`."""

import sys

from .cli import main

sys.exit(main())
