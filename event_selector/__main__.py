"""Allow ``python -m event_selector``."""

import sys

from event_selector.main import main

sys.exit(main())
