# config/config.py
import logging
import os
from pathlib import Path
from dotenv import load_dotenv

CONFIG_DIR = Path(__file__).resolve().parent
PROJECT_ROOT = CONFIG_DIR.parent

_loaded_from = None
for p in [
    PROJECT_ROOT / "env/.env.local",
    PROJECT_ROOT / "env/.env",
    CONFIG_DIR / "env/.env.local",
    CONFIG_DIR / "env/.env",
]:
    if p.is_file():
        load_dotenv(p, override=False)
        _loaded_from = str(p)
        break


def _env_flag(name: str, default: bool) -> bool:
    return os.getenv(name, "true" if default else "false").strip().lower() in ("1", "true", "yes", "on")


class Settings:
    # Pair-counting policy defaults
    PAIRCOUNTING_NOISE_SPECIAL: bool = _env_flag("PAIRCOUNTING_NOISE_SPECIAL", False)
    PAIRCOUNTING_SELF_PAIRING: bool = _env_flag("PAIRCOUNTING_SELF_PAIRING", True)

    # Candidates scored in parallel (1 = sequential)
    PAIRCOUNTING_MAX_WORKERS: int = int(os.getenv("PAIRCOUNTING_MAX_WORKERS", "1"))

    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")

    def reload(self) -> "Settings":
        """Re-read the environment (values are captured at import time otherwise)."""
        self.PAIRCOUNTING_NOISE_SPECIAL = _env_flag("PAIRCOUNTING_NOISE_SPECIAL", False)
        self.PAIRCOUNTING_SELF_PAIRING = _env_flag("PAIRCOUNTING_SELF_PAIRING", True)
        self.PAIRCOUNTING_MAX_WORKERS = int(os.getenv("PAIRCOUNTING_MAX_WORKERS", "1"))
        self.LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
        return self


settings = Settings()
where_loaded = _loaded_from  # for debugging


def configure_logging(level: str = None) -> int:
    """Apply LOG_LEVEL (or an explicit level) to the root logger and return it as a number"""
    numeric = logging.getLevelName((level or settings.LOG_LEVEL).upper())
    if not isinstance(numeric, int):
        raise ValueError(f"Unknown log level: {level or settings.LOG_LEVEL}")
    logging.basicConfig(level=numeric)
    logging.getLogger().setLevel(numeric)
    return numeric
