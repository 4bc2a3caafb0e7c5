"""Allow ``python -m insight_ingest``."""

import sys

from insight_ingest.cli import main

sys.exit(main())
