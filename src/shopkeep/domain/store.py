"""Entity store owning the five in-memory collections."""

import dataclasses
import logging
import uuid
from datetime import datetime
from typing import Any, Mapping, Optional

from shopkeep.database.base import Storage, StorageKey
from shopkeep.database.mappers import FROM_RECORD, TO_RECORD
from shopkeep.domain.entities import (
    Customer,
    Expense,
    InventoryTransaction,
    Product,
    Sale,
)
from shopkeep.domain.errors import (
    NotFoundError,
    PersistenceError,
    ValidationError,
    entity_not_found,
)

logger = logging.getLogger(__name__)

ENTITY_LABELS = {
    StorageKey.PRODUCTS: "Product",
    StorageKey.SALES: "Sale",
    StorageKey.EXPENSES: "Expense",
    StorageKey.CUSTOMERS: "Customer",
    StorageKey.INVENTORY_TRANSACTIONS: "Inventory transaction",
}


class EntityStore:
    """Single source of truth for products, sales, expenses, customers and
    inventory transactions during a session.

    Collections are immutable tuples. Every mutation builds new tuples,
    persists them through the storage adapter, and only replaces the
    in-memory state once the save succeeded, so memory and storage never
    diverge after a failed write.
    """

    def __init__(self, storage: Storage):
        """Initialize entity store.

        Args:
            storage: Storage adapter used to load and persist collections
        """
        self.storage = storage
        self.loading = False
        self._collections: dict[StorageKey, tuple[Any, ...]] = {key: () for key in StorageKey}

    @staticmethod
    def new_id() -> str:
        """Generate a collision-resistant entity id."""
        return uuid.uuid4().hex

    def load(self) -> None:
        """Replace in-memory state with the stored collections.

        A collection whose stored payload cannot be read is logged and
        treated as empty; the other collections still load.
        """
        self.loading = True
        try:
            self._collections = {key: self._load_collection(key) for key in StorageKey}
        finally:
            self.loading = False
        logger.info(
            "Loaded %s",
            ", ".join(f"{key.value}={len(items)}" for key, items in self._collections.items()),
        )

    def _load_collection(self, key: StorageKey) -> tuple[Any, ...]:
        try:
            records = self.storage.load(key)
            return tuple(FROM_RECORD[key](record) for record in records)
        except PersistenceError as e:
            logger.warning("Could not load %s, starting empty: %s", key.value, e)
        except (ArithmeticError, KeyError, TypeError, ValueError) as e:
            logger.warning("Stored %s are malformed, starting empty: %r", key.value, e)
        return ()

    @property
    def products(self) -> tuple[Product, ...]:
        return self._collections[StorageKey.PRODUCTS]

    @property
    def sales(self) -> tuple[Sale, ...]:
        return self._collections[StorageKey.SALES]

    @property
    def expenses(self) -> tuple[Expense, ...]:
        return self._collections[StorageKey.EXPENSES]

    @property
    def customers(self) -> tuple[Customer, ...]:
        return self._collections[StorageKey.CUSTOMERS]

    @property
    def inventory_transactions(self) -> tuple[InventoryTransaction, ...]:
        return self._collections[StorageKey.INVENTORY_TRANSACTIONS]

    def all(self, key: StorageKey) -> tuple[Any, ...]:
        """Return the current collection for a key."""
        return self._collections[key]

    def get(self, key: StorageKey, entity_id: str) -> Optional[Any]:
        """Get an entity by id, or None if it does not exist."""
        for entity in self._collections[key]:
            if entity.id == entity_id:
                return entity
        return None

    def require(self, key: StorageKey, entity_id: str) -> Any:
        """Get an entity by id, raising NotFoundError if it does not exist."""
        entity = self.get(key, entity_id)
        if entity is None:
            raise NotFoundError(entity_not_found(ENTITY_LABELS[key], entity_id))
        return entity

    def commit(self, changes: Mapping[StorageKey, tuple[Any, ...]]) -> None:
        """Persist the given collections in one save, then adopt them in memory.

        Raises:
            PersistenceError: If the storage adapter fails; in-memory state is
                left untouched.
        """
        records = {
            key: [TO_RECORD[key](entity) for entity in entities]
            for key, entities in changes.items()
        }
        self.storage.save_many(records)
        self._collections.update({key: tuple(entities) for key, entities in changes.items()})

    def create(self, key: StorageKey, entity: Any) -> Any:
        """Append an entity to its collection and persist it."""
        self.commit({key: self._collections[key] + (entity,)})
        logger.info("Created %s %s", ENTITY_LABELS[key].lower(), entity.id)
        return entity

    def replaced(
        self,
        key: StorageKey,
        entity_id: str,
        base: Optional[tuple[Any, ...]] = None,
        **patch: Any,
    ) -> tuple[Any, tuple[Any, ...]]:
        """Return (updated entity, new collection) without committing.

        Used by cascading mutations that persist several collections at once.
        ``base`` is a pending collection to patch instead of the current one.
        """
        collection = self._collections[key] if base is None else base
        current = next((entity for entity in collection if entity.id == entity_id), None)
        if current is None:
            raise NotFoundError(entity_not_found(ENTITY_LABELS[key], entity_id))
        allowed = {f.name for f in dataclasses.fields(current)} - {"id"}
        unknown = set(patch) - allowed
        if unknown:
            raise ValidationError(
                f"Cannot update {', '.join(sorted(unknown))} on {ENTITY_LABELS[key].lower()}"
            )

        if key == StorageKey.PRODUCTS:
            # updated_at never moves backwards for a product
            patch["updated_at"] = max(datetime.now(), current.updated_at)

        updated = dataclasses.replace(current, **patch)
        return updated, tuple(updated if entity.id == entity_id else entity for entity in collection)

    def update(self, key: StorageKey, entity_id: str, **patch: Any) -> Any:
        """Apply a partial update to an entity and persist its collection."""
        updated, collection = self.replaced(key, entity_id, **patch)
        self.commit({key: collection})
        logger.info("Updated %s %s: %s", ENTITY_LABELS[key].lower(), entity_id, ", ".join(sorted(patch)))
        return updated

    def delete(self, key: StorageKey, entity_id: str) -> None:
        """Remove an entity from its collection and persist it."""
        self.require(key, entity_id)
        self.commit(
            {key: tuple(entity for entity in self._collections[key] if entity.id != entity_id)}
        )
        logger.info("Deleted %s %s", ENTITY_LABELS[key].lower(), entity_id)

    def reset(self) -> None:
        """Remove every stored collection and empty the in-memory state."""
        self.storage.clear()
        self._collections = {key: () for key in StorageKey}
        logger.info("Cleared all data")
