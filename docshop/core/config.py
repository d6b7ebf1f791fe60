"""
Configuration helpers for the docshop backend.

Exposes a frozen Settings object read from environment variables (data file,
uploads directory, token secret, seed admin credentials, price range) so that
routers/services do not fetch os.environ directly.
"""

from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path
import os

ROOT_DIR = Path(__file__).resolve().parents[2]


@dataclass(frozen=True)
class Settings:
    """Typed view of environment variables."""

    app_env: str
    data_file: Path
    uploads_dir: Path
    jwt_secret: str
    jwt_algorithm: str
    session_ttl_seconds: int
    admin_username: str
    admin_email: str
    admin_password: str
    price_min: int
    price_max: int
    price_step: int
    max_upload_bytes: int
    log_level: str
    payment_name: str
    payment_phone: str
    payment_qr_template: str


@lru_cache
def get_settings() -> Settings:
    """Read the current environment and build a Settings instance."""
    def _int(value: str | None, default: int = 0) -> int:
        try:
            return int(value)
        except (TypeError, ValueError):
            return default

    def _path(value: str | None, default: Path) -> Path:
        raw = (value or "").strip()
        return Path(raw) if raw else default

    price_step = max(1, _int(os.getenv("PRICE_STEP"), 10000))
    price_min = max(price_step, _int(os.getenv("PRICE_MIN"), 10000))
    price_max = max(price_min, _int(os.getenv("PRICE_MAX"), 100000))

    return Settings(
        app_env=(os.getenv("APP_ENV") or "dev").lower(),
        data_file=_path(os.getenv("DATA_FILE"), ROOT_DIR / "data" / "db.json"),
        uploads_dir=_path(os.getenv("UPLOADS_DIR"), ROOT_DIR / "uploads"),
        jwt_secret=os.getenv("JWT_SECRET") or "demo-secret-please-change",
        jwt_algorithm=os.getenv("JWT_ALGORITHM") or "HS256",
        session_ttl_seconds=_int(os.getenv("SESSION_TTL_SECONDS"), 7 * 24 * 60 * 60),
        admin_username=os.getenv("ADMIN_USERNAME") or "bahana",
        admin_email=os.getenv("ADMIN_EMAIL") or "bahana@local",
        admin_password=os.getenv("ADMIN_PASSWORD") or "Nhan19.7@@@@",
        price_min=price_min,
        price_max=price_max,
        price_step=price_step,
        max_upload_bytes=_int(os.getenv("MAX_UPLOAD_BYTES"), 20 * 1024 * 1024),
        log_level=(os.getenv("LOG_LEVEL") or "INFO").upper(),
        payment_name=os.getenv("PAYMENT_NAME", "BACH HOAI NHAN"),
        payment_phone=os.getenv("PAYMENT_PHONE", "0975841693"),
        payment_qr_template=os.getenv(
            "PAYMENT_QR_TEMPLATE", "https://api.qrserver.com/v1/create-qr-code/?size=320x320&data="
        ),
    )
