import os
from typing import Optional

from pydantic import BaseModel, ValidationError

from hndigest.errors import ConfigError
from hndigest.tracker.ranker import DEFAULT_TOP_N
from hndigest.notifier.discord_notifier import SEND_DELAY_SEC
from hndigest.utils.tz_utils import DEFAULT_TIMEZONE

WEBHOOK_ENV = "DISCORD_WEBHOOK_URL"
SOURCE_ENV = "DATA_SOURCE_URL"


class Settings(BaseModel):
    """Everything a digest run needs, passed explicitly into the pipeline."""

    webhook_url: str = ""
    source_base_url: str
    timezone: str = DEFAULT_TIMEZONE
    top_n: int = DEFAULT_TOP_N
    send_delay_sec: float = SEND_DELAY_SEC
    schedule_hour: int = 8
    schedule_minute: int = 0

    @classmethod
    def from_env(
        cls,
        load_env: bool = True,
        dotenv_override: bool = True,
        require_webhook: bool = True,
    ) -> "Settings":
        """
        Build Settings from the environment (and .env when available).

        DISCORD_WEBHOOK_URL and DATA_SOURCE_URL are required; a missing one
        raises ConfigError before anything touches the network.
        """
        if load_env:
            from dotenv import load_dotenv
            load_dotenv(override=dotenv_override)

        webhook_url = os.getenv(WEBHOOK_ENV, "").strip()
        if require_webhook and not webhook_url:
            raise ConfigError(f"{WEBHOOK_ENV} environment variable is required")

        base_url = os.getenv(SOURCE_ENV, "").strip()
        if not base_url:
            raise ConfigError(f"{SOURCE_ENV} environment variable is required")

        optional = {
            "timezone": os.getenv("DIGEST_TIMEZONE"),
            "top_n": os.getenv("DIGEST_TOP_N"),
            "send_delay_sec": os.getenv("DIGEST_SEND_DELAY"),
            "schedule_hour": os.getenv("DIGEST_SCHEDULE_HOUR"),
            "schedule_minute": os.getenv("DIGEST_SCHEDULE_MINUTE"),
        }
        try:
            return cls(
                webhook_url=webhook_url,
                source_base_url=base_url,
                **{k: v for k, v in optional.items() if v},
            )
        except ValidationError as e:
            raise ConfigError(f"invalid configuration: {e}") from e

    def require_webhook(self) -> str:
        if not self.webhook_url:
            raise ConfigError(f"{WEBHOOK_ENV} environment variable is required")
        return self.webhook_url


def env_flag(name: str, default: bool = False) -> bool:
    value: Optional[str] = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}
