from abc import ABC, abstractmethod


class StorageBackend(ABC):
    @abstractmethod
    def save(self, key: str, data: bytes) -> str:
        """Save data and return where it was written."""
        ...

    @abstractmethod
    def get(self, key: str) -> bytes:
        """Retrieve file data by key."""
        ...

    @abstractmethod
    def exists(self, key: str) -> bool: ...
