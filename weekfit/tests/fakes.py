"""In-memory stand-ins for the Supabase client and the OpenAI chat client used by the tests."""
import copy
import itertools
from datetime import datetime, timedelta
from types import SimpleNamespace


class FakeAPIError(Exception):
    def __init__(self, message, code=None):
        super().__init__(message)
        self.message = message
        self.code = code


class FakeQuery:
    def __init__(self, db, table):
        self.db = db
        self.table = table
        self.filters = []
        self._order = None
        self._limit = None
        self._op = "select"
        self._payload = None

    def select(self, *columns):
        self._op = "select"
        return self

    def eq(self, column, value):
        self.filters.append((column, value))
        return self

    def order(self, column, desc=False):
        self._order = (column, desc)
        return self

    def limit(self, n):
        self._limit = n
        return self

    def insert(self, payload):
        self._op = "insert"
        self._payload = payload
        return self

    def update(self, payload):
        self._op = "update"
        self._payload = payload
        return self

    def _matches(self, row):
        return all(row.get(c) == v for c, v in self.filters)

    def execute(self):
        self.db.requests.append((self.table, self.db.authorization))
        if self.table in self.db.missing:
            raise FakeAPIError(f'relation "public.{self.table}" does not exist', code="42P01")
        if self.table in self.db.broken:
            raise FakeAPIError("connection reset", code="500")
        rows = self.db.tables.setdefault(self.table, [])

        if self._op == "insert":
            items = self._payload if isinstance(self._payload, list) else [self._payload]
            inserted = []
            for item in items:
                row = copy.deepcopy(item)
                row.setdefault("id", str(next(self.db.ids)))
                row.setdefault("created_at", self.db.next_timestamp())
                rows.append(row)
                inserted.append(copy.deepcopy(row))
            return SimpleNamespace(data=inserted)

        if self._op == "update":
            updated = []
            for row in rows:
                if self._matches(row):
                    row.update(copy.deepcopy(self._payload))
                    updated.append(copy.deepcopy(row))
            return SimpleNamespace(data=updated)

        result = [copy.deepcopy(r) for r in rows if self._matches(r)]
        if self._order:
            column, desc = self._order
            result.sort(key=lambda r: str(r.get(column) or ""), reverse=desc)
        if self._limit is not None:
            result = result[:self._limit]
        return SimpleNamespace(data=result)


class FakeAuth:
    def __init__(self, db):
        self.db = db
        self.users = {}
        self.tokens = {}
        self.signed_out = False
        self.revoked = []
        self.admin = self

    def _user(self, record):
        return SimpleNamespace(id=record["id"], email=record["email"], user_metadata=record["user_metadata"])

    def sign_up(self, credentials):
        email = credentials["email"]
        if email in self.users:
            raise FakeAPIError("User already registered")
        record = {
            "id": f"user-{len(self.users) + 1}",
            "email": email,
            "password": credentials["password"],
            "user_metadata": dict((credentials.get("options") or {}).get("data") or {}),
        }
        self.users[email] = record
        return SimpleNamespace(user=self._user(record), session=None)

    def sign_in_with_password(self, credentials):
        record = self.users.get(credentials["email"])
        if record is None or record["password"] != credentials["password"]:
            raise FakeAPIError("Invalid login credentials")
        token = f"token-{record['id']}"
        self.tokens[token] = record
        session = SimpleNamespace(access_token=token, refresh_token="refresh", expires_in=3600)
        return SimpleNamespace(user=self._user(record), session=session)

    def get_user(self, token):
        record = self.tokens.get(token)
        if record is None:
            raise FakeAPIError("invalid JWT")
        return SimpleNamespace(user=self._user(record))

    def sign_out(self, jwt=None, scope="global"):
        """Client sign-out, or admin.sign_out(jwt) revoking one session."""
        self.signed_out = True
        if jwt is not None:
            self.tokens.pop(jwt, None)
            self.revoked.append(jwt)


class FakeSupabase:
    """Supports the query chain used by the repositories: table().select/eq/order/limit/insert/update().execute()."""

    def __init__(self, missing=(), broken=()):
        self.tables = {}
        self.missing = set(missing)
        self.broken = set(broken)
        self.ids = itertools.count(1)
        self._clock = [datetime(2025, 1, 6, 8, 0, 0)]
        self.authorization = None
        self.requests = []
        self.auth = FakeAuth(self)

    def next_timestamp(self):
        self._clock[0] += timedelta(seconds=1)
        return self._clock[0].isoformat()

    def session(self, access_token=None):
        """Client view sharing the data but sending its own token, like one create_client per caller."""
        view = copy.copy(self)
        view.authorization = access_token
        return view

    def table(self, name):
        return FakeQuery(self, name)


def chat_reply(content):
    """Object shaped like an OpenAI chat completion with one choice."""
    return SimpleNamespace(choices=[SimpleNamespace(message=SimpleNamespace(content=content))])


def fake_openai(create):
    """Object exposing chat.completions.create like the OpenAI client."""
    return SimpleNamespace(chat=SimpleNamespace(completions=SimpleNamespace(create=create)))
