"""Web demo: settings loaded from the environment / .env file."""

import os

from dotenv import load_dotenv
from pydantic import BaseModel

BASE_DIR = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))

load_dotenv(os.path.join(BASE_DIR, ".env"))


def _env_float(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or raw == "":
        return default
    try:
        return float(raw)
    except ValueError:
        raise RuntimeError(f"{name} must be a number of seconds, got {raw!r}")


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or raw == "":
        return default
    try:
        return int(raw)
    except ValueError:
        raise RuntimeError(f"{name} must be an integer, got {raw!r}")


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None or raw == "":
        return default
    return raw.strip().lower() in ("1", "true", "yes", "on")


class Settings(BaseModel):
    host: str = "localhost"
    port: int = 3000

    idle_timeout: float = 5.0
    read_timeout: float = 5.0
    write_timeout: float = 5.0
    prefork: bool = True

    source_dir: str = os.path.join(BASE_DIR, "source")
    target_dir: str = os.path.join(BASE_DIR, "target")
    template_dir: str = os.path.join(BASE_DIR, "template")

    @classmethod
    def from_env(cls) -> "Settings":
        defaults = cls()
        return cls(
            host=os.getenv("WEBDEMO_HOST", defaults.host),
            port=_env_int("WEBDEMO_PORT", defaults.port),
            idle_timeout=_env_float("WEBDEMO_IDLE_TIMEOUT", defaults.idle_timeout),
            read_timeout=_env_float("WEBDEMO_READ_TIMEOUT", defaults.read_timeout),
            write_timeout=_env_float("WEBDEMO_WRITE_TIMEOUT", defaults.write_timeout),
            prefork=_env_bool("WEBDEMO_PREFORK", defaults.prefork),
            source_dir=os.getenv("WEBDEMO_SOURCE_DIR", defaults.source_dir),
            target_dir=os.getenv("WEBDEMO_TARGET_DIR", defaults.target_dir),
            template_dir=os.getenv("WEBDEMO_TEMPLATE_DIR", defaults.template_dir),
        )

    @property
    def request_timeout(self) -> float:
        """Deadline for a handler to start its response."""
        return self.read_timeout + self.write_timeout
