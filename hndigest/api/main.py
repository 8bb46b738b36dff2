import logging
import time
from contextlib import asynccontextmanager
from typing import Any, Dict, Optional

from apscheduler.schedulers.background import BackgroundScheduler
from dotenv import load_dotenv
from fastapi import FastAPI, HTTPException
from fastapi.middleware.gzip import GZipMiddleware

from hndigest.errors import ConfigError, DigestError, FetchError, WebhookError
from hndigest.settings import Settings, env_flag
from hndigest.tracker.digest import collect_ranked, resolve_date, run_digest
from hndigest.utils.tz_utils import get_zone

logger = logging.getLogger(__name__)

SCHEDULER_ENV = "DIGEST_ENABLE_SCHEDULER"

# Load .env before the first Settings lookup
load_dotenv(override=True)

# coalesce + max_instances: a late job never stacks on top of a running one
scheduler = BackgroundScheduler(
    job_defaults={
        "coalesce": True,
        "max_instances": 1,
        "misfire_grace_time": 300,
    }
)

last_run: Dict[str, Any] = {"ts": None, "date": None, "result": None, "error": None}


def get_settings(require_webhook: bool = False) -> Settings:
    return Settings.from_env(load_env=False, require_webhook=require_webhook)


def daily_digest_job() -> Dict[str, Any]:
    """Run the digest for today and remember the outcome in ``last_run``."""
    last_run["ts"] = int(time.time())
    try:
        settings = get_settings(require_webhook=True)
        result = run_digest(settings)
    except DigestError as e:
        logger.error("Daily digest failed: %s", e)
        last_run.update(date=None, result=None, error=str(e))
        return {"status": "error", "error": str(e)}
    last_run.update(date=result.get("date"), result=result, error=None)
    return result


@asynccontextmanager
async def lifespan(app: FastAPI):
    if env_flag(SCHEDULER_ENV):
        settings = get_settings(require_webhook=True)
        scheduler.add_job(
            daily_digest_job,
            "cron",
            hour=settings.schedule_hour,
            minute=settings.schedule_minute,
            timezone=get_zone(settings.timezone),
            id="daily_digest",
            replace_existing=True,
        )
        scheduler.start()
        logger.info("Daily digest scheduled at %02d:%02d", settings.schedule_hour, settings.schedule_minute)
    yield
    if scheduler.running:
        scheduler.shutdown(wait=False)


def _http_error(e: DigestError) -> HTTPException:
    if isinstance(e, WebhookError):
        return HTTPException(502, {"error": "webhook", "status_code": e.status_code, "body": e.body})
    if isinstance(e, FetchError):
        return HTTPException(502, {"error": "fetch", "message": str(e)})
    return HTTPException(500, {"error": "config", "message": str(e)})


def _resolve(settings: Settings, date: str) -> str:
    try:
        return resolve_date(settings, None if date == "today" else date)
    except ConfigError as e:
        raise HTTPException(400, str(e))


#%% APP

app = FastAPI(lifespan=lifespan)
app.add_middleware(GZipMiddleware, minimum_size=512)


@app.get("/health")
def health():
    return {"status": "ok", "ts": int(time.time())}


@app.get("/last-run")
def get_last_run():
    return {"status": "success", **last_run}


@app.get("/digest/{date}")
def digest_preview(date: str, limit: Optional[int] = None):
    """Ranked items for ``date`` (YYYY-MM-DD or 'today'), nothing is posted."""
    try:
        settings = get_settings()
    except ConfigError as e:
        raise _http_error(e)
    run_date = _resolve(settings, date)
    if limit is not None:
        settings = settings.model_copy(update={"top_n": limit})
    try:
        items = collect_ranked(settings, run_date)
    except DigestError as e:
        raise _http_error(e)
    return {
        "status": "success",
        "date": run_date,
        "data": [it.model_dump() for it in items],
    }


@app.post("/digest/{date}/publish")
def digest_publish(date: str):
    try:
        settings = get_settings(require_webhook=True)
    except ConfigError as e:
        raise _http_error(e)
    run_date = _resolve(settings, date)
    try:
        result = run_digest(settings, run_date)
    except DigestError as e:
        last_run.update(ts=int(time.time()), date=run_date, result=None, error=str(e))
        raise _http_error(e)
    last_run.update(ts=int(time.time()), date=run_date, result=result, error=None)
    return result


if __name__ == "__main__":
    import uvicorn
    uvicorn.run("hndigest.api.main:app", host="0.0.0.0", port=8000, reload=True)
