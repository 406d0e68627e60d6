import shutil
import tempfile
import unittest
from pathlib import Path

from fastapi.testclient import TestClient

from weekfit.api.api_run import app
from weekfit.api.dependencies import Backend, get_backend, get_current_user
from weekfit.infra.Local_Store import LocalStore

USER = {"id": "user-1", "email": "ana@example.com", "user_metadata": {"full_name": "Ana"}}

ANSWERS = {
    "goal": "weight_loss",
    "restrictions": ["vegan"],
    "budget": "moderate",
    "time": "quick",
    "experience": "beginner",
    "cuisines": ["italian"],
    "meals": ["breakfast", "lunch", "dinner"],
}


class ApiTestCase(unittest.TestCase):
    """TestClient over the app with the backend swapped for a temporary store (and optional fake Supabase)."""

    def make_db(self):
        return None

    def setUp(self):
        self.tmpdir = tempfile.mkdtemp()
        self.store = LocalStore(Path(self.tmpdir) / "store.json")
        self.db = self.make_db()
        self.backend = Backend(client=self.db, store=self.store)
        app.dependency_overrides[get_backend] = lambda: self.backend
        self.client = TestClient(app)

    def tearDown(self):
        app.dependency_overrides.clear()
        shutil.rmtree(self.tmpdir, ignore_errors=True)

    def login_as(self, user=USER):
        app.dependency_overrides[get_current_user] = lambda: user
