import sys
import types
import pathlib

import pytest

BASE_DIR = pathlib.Path(__file__).resolve().parents[1]
if str(BASE_DIR) not in sys.path:
    sys.path.insert(0, str(BASE_DIR))

from postgrest.exceptions import APIError  # noqa: E402

from jsonprompt.config import Settings  # noqa: E402
from jsonprompt.services import gateway as gateway_mod  # noqa: E402
from jsonprompt.services import waitlist as waitlist_mod  # noqa: E402

ENV_VARS = (
    "OPENAI_API_KEY",
    "OPENAI_MODEL",
    "OPENAI_MAX_TOKENS",
    "SUPABASE_URL",
    "SUPABASE_ANON_KEY",
    "NEXT_PUBLIC_SUPABASE_URL",
    "NEXT_PUBLIC_SUPABASE_ANON_KEY",
    "WAITLIST_TABLE",
    "CORS_ALLOW_ORIGINS",
    "PROMPTS_FILE",
)


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch, tmp_path):
    monkeypatch.setenv("DOTENV_DISABLED", "1")
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    # Keep any prompts.yml next to the code out of the tests
    monkeypatch.setenv("PROMPTS_FILE", str(tmp_path / "no-prompts.yml"))


@pytest.fixture
def settings_factory():
    def _make(**overrides) -> Settings:
        values = dict(
            openai_api_key="test-key",
            openai_model="gpt-test",
            openai_max_tokens=1024,
            supabase_url="https://abc.supabase.co",
            supabase_anon_key="eyJhbGciOiJIUzI1NiJ9.test",
            waitlist_table="waitlist",
            cors_allow_origins=["*"],
            log_level="INFO",
            prompts={},
        )
        values.update(overrides)
        return Settings(**values)

    return _make


class FakeLLM:
    """Stands in for AsyncOpenAI; records every chat.completions.create call."""

    def __init__(self):
        self.reply = "{}"
        self.error = None
        self.total_tokens = 42
        self.calls = []
        self.clients_created = 0

    def client_factory(self, api_key: str):
        self.clients_created += 1

        async def create(**kwargs):
            self.calls.append(kwargs)
            if self.error is not None:
                raise self.error
            return types.SimpleNamespace(
                choices=[types.SimpleNamespace(message=types.SimpleNamespace(content=self.reply))],
                usage=types.SimpleNamespace(total_tokens=self.total_tokens),
            )

        return types.SimpleNamespace(chat=types.SimpleNamespace(completions=types.SimpleNamespace(create=create)))


@pytest.fixture
def fake_llm(monkeypatch):
    fake = FakeLLM()
    monkeypatch.setattr(gateway_mod, "AsyncOpenAI", fake.client_factory)
    return fake


class FakeSupabase:
    """Minimal table().insert().execute() chain backed by a list."""

    def __init__(self):
        self.rows = []
        self.tables = []
        self.error = None
        self.connections = []

    def connect(self, url, key):
        self.connections.append((url, key))
        return self

    def table(self, name):
        self.tables.append(name)
        return _FakeInsert(self)


class _FakeInsert:
    def __init__(self, db: FakeSupabase):
        self._db = db
        self._row = None

    def insert(self, row):
        self._row = row
        return self

    def execute(self):
        if self._db.error is not None:
            raise self._db.error
        if any(r["email"] == self._row["email"] for r in self._db.rows):
            raise APIError(
                {
                    "code": "23505",
                    "message": 'duplicate key value violates unique constraint "waitlist_email_key"',
                    "details": None,
                    "hint": None,
                }
            )
        self._db.rows.append(dict(self._row))
        return types.SimpleNamespace(data=[self._row])


@pytest.fixture
def fake_supabase(monkeypatch):
    fake = FakeSupabase()
    monkeypatch.setattr(waitlist_mod, "create_client", fake.connect)
    return fake
