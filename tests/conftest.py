"""Root conftest — shared test configuration."""

import os

# Ensure tests never pick up real credentials from the environment
for name in list(os.environ):
    if name.startswith("APLIIQ_"):
        del os.environ[name]
