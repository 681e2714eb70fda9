"""Allow running as python -m meshtastic_gopher_client."""

import sys

from .cli import main

sys.exit(main())
