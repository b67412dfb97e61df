"""Test suite. Cheap bcrypt cost so account setup stays fast."""

import os

os.environ.setdefault("BCRYPT_ROUNDS", "4")
