"""Unit tests for FakeCatRepository: verifies Port contract compliance."""

import threading
import unittest

from adapter.fake.cat_repository import FakeCatRepository
from domain.model.cat import Cat


class TestFakeCatRepository(unittest.TestCase):

    def setUp(self):
        self.repo = FakeCatRepository()

    def test_insert_assigns_monotonic_ids(self):
        first = self.repo.insert(Cat(name="Tom", age=3, breed="Siamese"))
        second = self.repo.insert(Cat(name="Kit", age=1, breed="Tabby"))

        self.assertEqual(first.id, 1)
        self.assertEqual(second.id, 2)

    def test_insert_keeps_explicit_id(self):
        cat = self.repo.insert(Cat(id=42, name="Tom", age=3, breed="Siamese"))

        self.assertEqual(cat.id, 42)

    def test_insert_does_not_mutate_argument(self):
        draft = Cat(name="Tom", age=3, breed="Siamese")
        self.repo.insert(draft)

        self.assertIsNone(draft.id)

    def test_list_all_in_insertion_order(self):
        for name in ["a", "b", "c"]:
            self.repo.insert(Cat(name=name, age=1, breed="x"))

        self.assertEqual([c.name for c in self.repo.list_all()], ["a", "b", "c"])

    def test_list_all_returns_fresh_snapshot(self):
        self.repo.insert(Cat(name="Tom", age=3, breed="Siamese"))
        snapshot = self.repo.list_all()
        snapshot[0].name = "changed"

        self.assertEqual(self.repo.list_all()[0].name, "Tom")

    def test_concurrent_inserts_get_unique_ids(self):
        def worker():
            for _ in range(50):
                self.repo.insert(Cat(name="c", age=1, breed="x"))

        threads = [threading.Thread(target=worker) for _ in range(4)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        ids = [c.id for c in self.repo.list_all()]
        self.assertEqual(len(ids), 200)
        self.assertEqual(len(set(ids)), 200)


if __name__ == '__main__':
    unittest.main()
