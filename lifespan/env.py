import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

TRUE_SYNS = {"1", "true", "yes", "on"}
LOG_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}


def load_env() -> None:
    """Load .env from the working directory if present."""
    env_path = Path.cwd() / ".env"
    if env_path.exists():
        load_dotenv(dotenv_path=env_path)


def _env_int(name: str) -> Optional[int]:
    raw = os.getenv(name, "").strip()
    if not raw:
        return None
    try:
        return int(raw)
    except ValueError:
        raise SystemExit(f"{name} must be an integer, got {raw!r}")


@dataclass(frozen=True)
class Settings:
    log_level: str = "INFO"
    log_dir: Path = Path("logs")
    log_file: bool = False
    seed: Optional[int] = None

    @classmethod
    def from_env(cls) -> "Settings":
        """
        LIFESPAN_LOG_LEVEL, LIFESPAN_LOG_DIR, LIFESPAN_LOG_FILE and
        LIFESPAN_SEED; model weights are not configurable.
        """
        level = os.getenv("LIFESPAN_LOG_LEVEL", "INFO").strip().upper()
        if level not in LOG_LEVELS:
            raise SystemExit(f"LIFESPAN_LOG_LEVEL must be one of {sorted(LOG_LEVELS)}, got {level!r}")
        return cls(
            log_level=level,
            log_dir=Path(os.getenv("LIFESPAN_LOG_DIR", "logs")),
            log_file=os.getenv("LIFESPAN_LOG_FILE", "").strip().lower() in TRUE_SYNS,
            seed=_env_int("LIFESPAN_SEED"),
        )
