from dataclasses import dataclass
import os
from pathlib import Path

from dotenv import load_dotenv

# backend/app/core/config.py -> backend/.env
env_path = Path(__file__).parent.parent.parent / ".env"
if env_path.exists():
    # Real environment variables take precedence over .env values.
    load_dotenv(env_path, override=False)


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    return raw.strip().lower() in {"1", "true", "yes", "y", "on"}


@dataclass(frozen=True)
class Settings:
    app_name: str = os.getenv("APP_NAME", "Wazuh Hunting Dashboard API")
    app_env: str = os.getenv("APP_ENV", "dev")
    app_version: str = os.getenv("APP_VERSION", "0.1.0")
    log_level: str = os.getenv("LOG_LEVEL", "INFO")

    # Wazuh indexer (OpenSearch)
    indexer_url: str = os.getenv("INDEXER_URL", "https://localhost:9200")
    indexer_username: str = os.getenv("INDEXER_USERNAME", "admin")
    indexer_password: str = os.getenv("INDEXER_PASSWORD", "")
    indexer_verify_certs: bool = _env_bool("INDEXER_VERIFY_CERTS", False)
    alerts_index_pattern: str = os.getenv("ALERTS_INDEX_PATTERN", "wazuh-alerts-*")

    # Wazuh manager API (FIM inventory)
    wazuh_api_url: str = os.getenv("WAZUH_API_URL", "https://localhost:55000")
    wazuh_api_username: str = os.getenv("WAZUH_API_USERNAME", "wazuh")
    wazuh_api_password: str = os.getenv("WAZUH_API_PASSWORD", "")
    wazuh_api_timeout: float = float(os.getenv("WAZUH_API_TIMEOUT", "15.0"))

    # Telegram notifications; disabled while token or chat id is empty
    telegram_bot_token: str = os.getenv("TELEGRAM_BOT_TOKEN", "")
    telegram_chat_id: str = os.getenv("TELEGRAM_CHAT_ID", "")
    notify_timeout: float = float(os.getenv("NOTIFY_TIMEOUT", "10.0"))
    notify_max_retries: int = int(os.getenv("NOTIFY_MAX_RETRIES", "2"))
    notify_retry_backoff: float = float(os.getenv("NOTIFY_RETRY_BACKOFF", "1.0"))
    alert_min_level: int = int(os.getenv("ALERT_MIN_LEVEL", "1"))

    # Local FIM event store
    events_db_path: str = os.getenv(
        "EVENTS_DB_PATH", str(Path(__file__).parent.parent.parent / "data" / "wazuh_events.db")
    )


settings = Settings()
