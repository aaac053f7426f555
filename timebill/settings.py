import logging
import secrets
from decimal import Decimal

from pydantic_settings import BaseSettings, SettingsConfigDict

from timebill.models.document import DocumentConfig

logger = logging.getLogger(__name__)

_INSECURE_DEFAULT_KEY = "change-me-in-production"


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_prefix="TIMEBILL_", extra="ignore")

    db_url: str = "sqlite:///timebill.db"
    timezone: str = "America/Los_Angeles"

    hourly_rate: Decimal = Decimal("55.00")
    client_name: str = "Client"
    contact_name: str = ""
    contact_phone: str = ""
    contact_email: str = ""
    title_prefix: str = ""

    cors_allow_origin: str = "*"

    storage_local_path: str = "./documents"
    storage_prefix: str = "time-tracking"

    log_level: str = "INFO"
    log_json: bool = False

    secret_key: str = _INSECURE_DEFAULT_KEY

    def get_secret_key(self) -> str:
        if self.secret_key == _INSECURE_DEFAULT_KEY:
            logger.warning(
                "TIMEBILL_SECRET_KEY is not set, using a random key. "
                "Sessions will not survive restarts. "
                "Set TIMEBILL_SECRET_KEY in your environment or .env file."
            )
            self.secret_key = secrets.token_urlsafe(32)
        return self.secret_key

    def document_config(self) -> DocumentConfig:
        return DocumentConfig(
            hourly_rate=self.hourly_rate,
            client_name=self.client_name,
            contact_name=self.contact_name,
            contact_phone=self.contact_phone,
            contact_email=self.contact_email,
            title_prefix=self.title_prefix,
        )


settings = Settings()
