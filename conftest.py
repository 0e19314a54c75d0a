"""
Test configuration.

Environment is set before any app module is imported: the database module
reads DATABASE_URL at import time.
"""

import os
import tempfile

_tmp_dir = tempfile.mkdtemp(prefix="exchange-tests-")
os.environ["DATABASE_URL"] = f"sqlite:///{os.path.join(_tmp_dir, 'test.db')}"
os.environ["SMTP_DISABLE"] = "1"
os.environ["ADMIN_EMAIL"] = "admin@example.edu"
os.environ["ADMIN_PASSWORD"] = "s3cret-pass"
os.environ["JWT_SECRET"] = "test-secret-with-enough-bytes-for-hs256"
os.environ.pop("ADMIN_PASSWORD_HASH", None)
os.environ.pop("CATALOG_SPREADSHEET_ID", None)
