"""Allow running the script filter with ``python -m tab_query``."""

import sys

from .main import main

sys.exit(main())
