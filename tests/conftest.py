"""Global test fixtures."""

import os

# Config must never pick up a developer's settings file or database
os.environ.pop("GATEHOUSE_CONFIG_FILE", None)
os.environ.setdefault("GATEHOUSE_DATABASE__URL", "sqlite+aiosqlite:///:memory:")
