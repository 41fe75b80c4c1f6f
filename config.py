"""Configuration management for FinanceBot.

Reads configuration from ~/.config/financebot.toml and creates a default config
if needed. Credentials and a few deployment settings can be overridden through
environment variables (a local .env file is loaded first, if present).
"""

import os
from pathlib import Path
from dataclasses import dataclass, field
from typing import List, Optional
import tomllib
import tomli_w
from dotenv import load_dotenv

from errors import ConfigError

# Allowed sender when no allow-list is configured.
DEFAULT_AUTHORIZED_USER = "iamoxyrus"

DEFAULT_OPENAI_MODEL = "gpt-4o-mini"


@dataclass
class Config:
    """Application configuration."""

    base_dir: Path
    storage_path: Optional[Path]
    log_level: str
    log_dir: Path
    telegram_token: str = ""
    openai_api_key: str = ""
    openai_model: str = DEFAULT_OPENAI_MODEL
    authorized_users: List[str] = field(
        default_factory=lambda: [DEFAULT_AUTHORIZED_USER]
    )

    @classmethod
    def default(cls) -> "Config":
        """Create a Config with default values."""
        base_dir = Path.home() / "data" / "financebot"
        return cls(
            base_dir=base_dir,
            storage_path=base_dir / "db" / "financebot.db",
            log_level="INFO",
            log_dir=base_dir / "logs",
        )

    def require_credentials(self) -> None:
        """Fail fast when the bot cannot talk to Telegram or OpenAI.

        Raises:
            ConfigError: If the Telegram token or the OpenAI API key is unset.
        """
        if not self.telegram_token or not self.openai_api_key:
            raise ConfigError("TELEGRAM_TOKEN or OPENAI_API_KEY not set")


def get_config_path() -> Path:
    """Get the path to the config file."""
    return Path.home() / ".config" / "financebot.toml"


def parse_authorized_users(raw: str) -> List[str]:
    """Split a comma-separated allow-list, dropping blanks and duplicates.

    Args:
        raw: Value such as "alice, @bob,,carol".

    Returns:
        Usernames in their original order, without a leading "@".
    """
    users = []
    for user in raw.split(","):
        user = user.strip().removeprefix("@")
        if user and user not in users:
            users.append(user)
    return users


def load_config() -> Config:
    """Load configuration from file, creating default if it doesn't exist.

    Environment variables take precedence over the file:
    TELEGRAM_TOKEN, OPENAI_API_KEY, OPENAI_MODEL, AUTHORIZED_USERS,
    EXPENSES_DB_PATH and LOG_LEVEL.

    Returns:
        Config object with loaded or default values.
    """
    load_dotenv()

    config_path = get_config_path()

    # If config doesn't exist, create it with defaults
    if not config_path.exists():
        config = Config.default()
        _write_config(config)
    else:
        with open(config_path, "rb") as f:
            data = tomllib.load(f)
        config = _from_dict(data)

    _apply_env(config)
    return config


def _from_dict(data: dict) -> Config:
    """Build a Config from parsed TOML, with defaults for missing values."""
    base_dir = Path(data.get("base_dir", Path.home() / "data" / "financebot"))

    db_config = data.get("database", {})
    # An empty path selects the in-memory ledger
    raw_path = db_config.get("path", str(base_dir / "db" / "financebot.db"))
    storage_path = Path(raw_path) if raw_path else None

    log_config = data.get("logging", {})
    log_level = log_config.get("level", "INFO")
    log_dir = Path(log_config.get("log_dir", base_dir / "logs"))

    telegram_config = data.get("telegram", {})
    users = telegram_config.get("authorized_users", [])
    if isinstance(users, str):
        users = parse_authorized_users(users)

    openai_config = data.get("openai", {})

    return Config(
        base_dir=base_dir,
        storage_path=storage_path,
        log_level=log_level,
        log_dir=log_dir,
        telegram_token=telegram_config.get("token", ""),
        openai_api_key=openai_config.get("api_key", ""),
        openai_model=openai_config.get("model", DEFAULT_OPENAI_MODEL),
        authorized_users=list(users) or [DEFAULT_AUTHORIZED_USER],
    )


def _apply_env(config: Config) -> None:
    """Override config values from the environment."""
    if os.getenv("TELEGRAM_TOKEN"):
        config.telegram_token = os.environ["TELEGRAM_TOKEN"]
    if os.getenv("OPENAI_API_KEY"):
        config.openai_api_key = os.environ["OPENAI_API_KEY"]
    if os.getenv("OPENAI_MODEL"):
        config.openai_model = os.environ["OPENAI_MODEL"]
    if os.getenv("LOG_LEVEL"):
        config.log_level = os.environ["LOG_LEVEL"].upper()

    users = parse_authorized_users(os.getenv("AUTHORIZED_USERS", ""))
    if users:
        config.authorized_users = users

    if "EXPENSES_DB_PATH" in os.environ:
        raw_path = os.environ["EXPENSES_DB_PATH"].strip()
        config.storage_path = Path(raw_path) if raw_path else None


def _write_config(config: Config) -> None:
    """Write config to the config file.

    Secrets are never written; they are expected in the environment.

    Args:
        config: Config object to write.
    """
    config_path = get_config_path()

    # Ensure config directory exists
    config_path.parent.mkdir(parents=True, exist_ok=True)

    data = {
        "base_dir": str(config.base_dir),
        "database": {
            "path": str(config.storage_path) if config.storage_path else "",
        },
        "logging": {
            "level": config.log_level,
            "log_dir": str(config.log_dir),
        },
        "telegram": {
            "authorized_users": list(config.authorized_users),
        },
        "openai": {
            "model": config.openai_model,
        },
    }

    with open(config_path, "wb") as f:
        tomli_w.dump(data, f)
