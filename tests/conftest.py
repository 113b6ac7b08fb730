# pytest configuration for kb_export tests
import sys
from datetime import datetime, timezone
from pathlib import Path

import pytest

# Ensure the package root is in sys.path for proper imports
repo_root = Path(__file__).parent.parent
if str(repo_root) not in sys.path:
    sys.path.insert(0, str(repo_root))

FIXED_NOW = datetime(2024, 3, 5, 7, 8, 9, 123456, tzinfo=timezone.utc)


@pytest.fixture
def fixed_clock():
    """Clock frozen at 2024-03-05 07:08:09.123456 UTC."""
    return lambda: FIXED_NOW
