"""MongoDB implementation of CatRepository.

Ids are monotonic integers drawn from a per-collection counter document.
A failed insert may leave a gap in the sequence, never a partial cat.
"""

from logging import getLogger

from bson.errors import InvalidDocument
from pymongo import ReturnDocument
from pymongo.database import Database
from pymongo.errors import PyMongoError

from adapter.mongodb import CATS_COLLECTION_NAME, COUNTERS_COLLECTION_NAME
from domain.model.cat import Cat
from domain.model.errors import PersistenceError

logger = getLogger(__name__)


class MongoCatRepository:
    def __init__(self, db: Database):
        self.collection = db[CATS_COLLECTION_NAME]
        self.counters = db[COUNTERS_COLLECTION_NAME]

    def _to_domain(self, doc: dict) -> Cat:
        return Cat(id=doc['_id'], name=doc['name'], age=doc['age'], breed=doc['breed'])

    def _next_id(self) -> int:
        counter = self.counters.find_one_and_update(
            {'_id': CATS_COLLECTION_NAME},
            {'$inc': {'seq': 1}},
            upsert=True,
            return_document=ReturnDocument.AFTER,
        )
        return counter['seq']

    # ── write operations ─────────────────────────────────────

    def insert(self, cat: Cat) -> Cat:
        try:
            cat_id = cat.id if cat.id is not None else self._next_id()
            doc = {'_id': cat_id, 'name': cat.name, 'age': cat.age, 'breed': cat.breed}
            self.collection.insert_one(doc)
        except (PyMongoError, InvalidDocument, OverflowError) as e:
            logger.error("Failed to insert cat", extra={"error": str(e)[:200]})
            raise PersistenceError("Failed to insert cat") from e

        logger.info("Cat inserted", extra={"catId": cat_id})
        return self._to_domain(doc)

    # ── read operations ──────────────────────────────────────

    def list_all(self) -> list[Cat]:
        try:
            return [self._to_domain(doc) for doc in self.collection.find().sort('_id', 1)]
        except PyMongoError as e:
            logger.error("Failed to list cats", extra={"error": str(e)[:200]})
            raise PersistenceError("Failed to list cats") from e
