from __future__ import annotations

from dataclasses import dataclass
import os
from pathlib import Path
import sys


class ConfigurationError(ValueError):
    pass


_TRUE_VALUES = {"1", "true", "yes", "on"}
_FALSE_VALUES = {"", "0", "false", "no", "off"}


@dataclass(frozen=True)
class AppSettings:
    base_url: str
    login_url: str
    debug_mode: bool
    refresh_interval_ms: int
    session_cookie_name: str
    session_cookie: str
    timeout_seconds: int
    notification_duration_ms: int
    activity_limit: int

    @staticmethod
    def from_env() -> "AppSettings":
        _load_dotenv_if_present()

        base_url = os.getenv("ADMIN_API_BASE_URL", "http://localhost:3000").strip().rstrip("/")
        login_url = os.getenv("ADMIN_LOGIN_URL", "").strip() or f"{base_url}/login.html"

        settings = AppSettings(
            base_url=base_url,
            login_url=login_url,
            debug_mode=_get_bool("ADMIN_DEBUG_MODE", False),
            refresh_interval_ms=_get_int("ADMIN_REFRESH_INTERVAL", 30000),
            session_cookie_name=os.getenv("ADMIN_SESSION_COOKIE_NAME", "connect.sid").strip(),
            session_cookie=os.getenv("ADMIN_SESSION_COOKIE", "").strip(),
            timeout_seconds=_get_int("ADMIN_TIMEOUT_SECONDS", 15),
            notification_duration_ms=_get_int("ADMIN_NOTIFICATION_DURATION_MS", 5000),
            activity_limit=_get_int("ADMIN_ACTIVITY_LIMIT", 20),
        )
        settings.validate()
        return settings

    def validate(self) -> None:
        if not self.base_url.startswith(("http://", "https://")):
            raise ConfigurationError("ADMIN_API_BASE_URL must start with http:// or https://")

        if self.session_cookie and not self.session_cookie_name:
            raise ConfigurationError(
                "ADMIN_SESSION_COOKIE_NAME is required when ADMIN_SESSION_COOKIE is set"
            )

        positive_fields = {
            "ADMIN_REFRESH_INTERVAL": self.refresh_interval_ms,
            "ADMIN_TIMEOUT_SECONDS": self.timeout_seconds,
            "ADMIN_NOTIFICATION_DURATION_MS": self.notification_duration_ms,
            "ADMIN_ACTIVITY_LIMIT": self.activity_limit,
        }
        invalid = [name for name, value in positive_fields.items() if value <= 0]
        if invalid:
            raise ConfigurationError(
                "Settings must be greater than 0: " + ", ".join(invalid)
            )


def _get_int(name: str, default: int) -> int:
    raw = os.getenv(name, "").strip()
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError as error:
        raise ConfigurationError(f"{name} must be an integer, got {raw!r}") from error


def _get_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default

    value = raw.strip().lower()
    if value in _TRUE_VALUES:
        return True
    if value in _FALSE_VALUES:
        return False
    raise ConfigurationError(f"{name} must be a boolean (true/false), got {raw!r}")


def _load_dotenv_if_present(file_name: str = ".env") -> None:
    for candidate in _candidate_env_files(file_name):
        _load_env_file(candidate)


def _candidate_env_files(file_name: str) -> list[Path]:
    candidates: list[Path] = []

    explicit = os.getenv("ADMIN_ENV_FILE", "").strip()
    if explicit:
        candidates.append(Path(explicit).expanduser())

    candidates.append(Path.cwd() / file_name)

    if getattr(sys, "frozen", False):
        exe_dir = Path(sys.executable).resolve().parent
        candidates.append(exe_dir / file_name)
    else:
        project_root = Path(__file__).resolve().parent.parent
        candidates.append(project_root / file_name)

    unique_candidates: list[Path] = []
    seen: set[str] = set()
    for path in candidates:
        normalized = str(path.resolve()) if path.exists() else str(path)
        if normalized in seen:
            continue
        seen.add(normalized)
        unique_candidates.append(path)
    return unique_candidates


def _load_env_file(path: Path) -> None:
    if not path.exists():
        return

    try:
        with path.open("r", encoding="utf-8") as env_file:
            for raw_line in env_file:
                line = raw_line.strip()
                if not line or line.startswith("#") or "=" not in line:
                    continue

                key, value = line.split("=", 1)
                key = key.strip()
                value = value.strip().strip('"').strip("'")

                if key and key not in os.environ:
                    os.environ[key] = value
    except OSError:
        return
