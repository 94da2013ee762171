"""Settings for the pytest run.

``SECRET_KEY`` has no default in production settings, so it is injected
here before they are imported. Seeding on migrate is off so the test
database starts empty.
"""

import os

os.environ.setdefault("SECRET_KEY", "test-secret-key-not-for-production")
os.environ.setdefault("DATABASE_URL", "sqlite://:memory:")
os.environ.setdefault("PRODUCT_SEED_ON_MIGRATE", "False")

from config.settings import *  # noqa: E402,F401,F403
