# hndigest/tests/test_api_basic.py
from hndigest.errors import FetchError, WebhookError
from hndigest.storage.models import NewsItem


def test_health(client):
    r = client.get("/health")
    assert r.status_code == 200
    j = r.json()
    assert j["status"] == "ok"
    assert isinstance(j["ts"], int)


def test_digest_preview(client, monkeypatch):
    from hndigest.api import main as api_main
    seen = {}

    def fake_collect(settings, date):
        seen["top_n"] = settings.top_n
        return [NewsItem(id=1, titleJa="テスト", url="http://x", score=5, rank=1)]

    monkeypatch.setattr(api_main, "collect_ranked", fake_collect, raising=True)

    r = client.get("/digest/2025-01-31", params={"limit": 3})
    assert r.status_code == 200
    j = r.json()
    assert j["date"] == "2025-01-31"
    assert j["data"][0]["title_ja"] == "テスト"
    assert seen["top_n"] == 3


def test_digest_preview_bad_date(client):
    r = client.get("/digest/yesterday")
    assert r.status_code == 400


def test_digest_preview_fetch_error(client, monkeypatch):
    from hndigest.api import main as api_main

    def boom(settings, date):
        raise FetchError("unexpected status code: 404")

    monkeypatch.setattr(api_main, "collect_ranked", boom, raising=True)
    r = client.get("/digest/2025-01-31")
    assert r.status_code == 502
    assert r.json()["detail"]["error"] == "fetch"


def test_publish_and_last_run(client, monkeypatch):
    from hndigest.api import main as api_main

    monkeypatch.setattr(
        api_main, "run_digest",
        lambda settings, date: {"status": "sent", "count": 4, "batches": 2, "date": date},
        raising=True,
    )
    r = client.post("/digest/2025-01-31/publish")
    assert r.status_code == 200
    assert r.json()["batches"] == 2

    r = client.get("/last-run")
    j = r.json()
    assert j["date"] == "2025-01-31"
    assert j["error"] is None


def test_publish_webhook_failure(client, monkeypatch):
    from hndigest.api import main as api_main

    def fail(settings, date):
        raise WebhookError(500, "boom")

    monkeypatch.setattr(api_main, "run_digest", fail, raising=True)
    r = client.post("/digest/2025-01-31/publish")
    assert r.status_code == 502
    assert r.json()["detail"] == {"error": "webhook", "status_code": 500, "body": "boom"}


def test_publish_without_webhook(client, monkeypatch):
    monkeypatch.delenv("DISCORD_WEBHOOK_URL")
    r = client.post("/digest/2025-01-31/publish")
    assert r.status_code == 500
    assert "DISCORD_WEBHOOK_URL" in r.json()["detail"]["message"]
