"""MongoDB implementation of DogRepository."""

import uuid
from datetime import datetime, timezone
from logging import getLogger

from bson.errors import InvalidDocument
from pymongo.database import Database
from pymongo.errors import PyMongoError

from adapter.mongodb import DOGS_COLLECTION_NAME
from domain.model.dog import Dog
from domain.model.errors import PersistenceError

logger = getLogger(__name__)


class MongoDogRepository:
    def __init__(self, db: Database):
        self.collection = db[DOGS_COLLECTION_NAME]

    def ensure_indexes(self) -> bool:
        """Create indexes for dogs collection."""
        try:
            self.collection.create_index([('created_at', 1)], name='idx_dogs_created_at')
            return True
        except PyMongoError as e:
            logger.error("Failed to create dogs indexes", extra={"error": str(e)})
            return False

    def _to_domain(self, doc: dict) -> Dog:
        return Dog(id=doc['_id'], name=doc['name'], age=doc['age'], breed=doc['breed'])

    def insert(self, dog: Dog) -> Dog:
        doc = {
            '_id': dog.id or uuid.uuid4().hex,
            'name': dog.name,
            'age': dog.age,
            'breed': dog.breed,
            'created_at': datetime.now(timezone.utc),
        }
        try:
            self.collection.insert_one(doc)
        except (PyMongoError, InvalidDocument, OverflowError) as e:
            logger.error("Failed to insert dog", extra={"error": str(e)[:200]})
            raise PersistenceError("Failed to insert dog") from e
        return self._to_domain(doc)

    def list_all(self) -> list[Dog]:
        try:
            return [self._to_domain(doc) for doc in self.collection.find().sort('created_at', 1)]
        except PyMongoError as e:
            logger.error("Failed to list dogs", extra={"error": str(e)[:200]})
            raise PersistenceError("Failed to list dogs") from e
