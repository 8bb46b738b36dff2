# hndigest/tests/conftest.py
import pytest


@pytest.fixture()
def env(monkeypatch):
    monkeypatch.setenv("DISCORD_WEBHOOK_URL", "https://discord.test/api/webhooks/1/abc")
    monkeypatch.setenv("DATA_SOURCE_URL", "https://data.test/rsc")
    for name in ("DIGEST_TIMEZONE", "DIGEST_TOP_N", "DIGEST_SEND_DELAY",
                 "DIGEST_SCHEDULE_HOUR", "DIGEST_SCHEDULE_MINUTE", "DIGEST_ENABLE_SCHEDULER"):
        monkeypatch.delenv(name, raising=False)
    # no stray .env from the working directory
    monkeypatch.setattr("dotenv.load_dotenv", lambda *a, **k: False)


@pytest.fixture()
def settings(env):
    from hndigest.settings import Settings
    return Settings.from_env(load_env=False)


@pytest.fixture()
def app(monkeypatch, env):
    from hndigest.api import main as api_main

    # scheduler.start/shutdown: no-op
    class DummyScheduler:
        running = False
        def add_job(self, *a, **k): pass
        def start(self): pass
        def shutdown(self, wait=False): pass
    monkeypatch.setattr(api_main, "scheduler", DummyScheduler(), raising=True)
    return api_main.app


@pytest.fixture()
def client(app):
    from fastapi.testclient import TestClient
    with TestClient(app) as c:
        yield c
