import os
import tempfile

import pytest

# Must be set before befundtool.config is imported anywhere
_tmpdir = tempfile.mkdtemp(prefix="befundtool-test-")
os.environ["SQLITE_DB_PATH"] = os.path.join(_tmpdir, "test.db")
os.environ["OPENAI_API_KEY"] = ""
os.environ["DEEPGRAM_API_KEY"] = ""


@pytest.fixture(scope="session", autouse=True)
def database():
    from befundtool.database import init_db
    init_db()


@pytest.fixture
def client():
    from fastapi.testclient import TestClient
    from befundtool.web.app import app
    return TestClient(app)
