"""Abstract storage interface."""

from abc import ABC, abstractmethod
from enum import Enum
from typing import Any, Mapping

Record = dict[str, Any]


class StorageKey(str, Enum):
    """Fixed storage keys, one per entity collection."""

    PRODUCTS = "products"
    SALES = "sales"
    EXPENSES = "expenses"
    CUSTOMERS = "customers"
    INVENTORY_TRANSACTIONS = "inventory_transactions"


class Storage(ABC):
    """Key-value store of JSON-serializable record arrays.

    Implementations raise PersistenceError when a save fails or a stored
    payload cannot be read back. A key that was never saved loads as an
    empty list.
    """

    @abstractmethod
    def connect(self) -> None:
        """Connect to the backing store."""
        pass

    @abstractmethod
    def disconnect(self) -> None:
        """Release the connection to the backing store."""
        pass

    @abstractmethod
    def load(self, key: StorageKey) -> list[Record]:
        """Return the last saved records for a key."""
        pass

    @abstractmethod
    def save_many(self, collections: Mapping[StorageKey, list[Record]]) -> None:
        """Persist several collections in a single commit.

        Either every collection is written or none is.
        """
        pass

    def save(self, key: StorageKey, records: list[Record]) -> None:
        """Persist the full record array for one key."""
        self.save_many({key: records})

    @abstractmethod
    def clear(self) -> None:
        """Remove every stored collection."""
        pass
