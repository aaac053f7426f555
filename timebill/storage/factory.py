import logging

from timebill.settings import settings
from timebill.storage.base import StorageBackend

logger = logging.getLogger(__name__)


def document_storage_key(month_key: str, filename: str) -> str:
    prefix = settings.storage_prefix
    if prefix:
        return f"{prefix}/{month_key}/{filename}"
    return f"{month_key}/{filename}"


def get_storage() -> StorageBackend:
    from timebill.storage.local import LocalStorage

    logger.info("Using local storage at %s", settings.storage_local_path)
    return LocalStorage(settings.storage_local_path)
