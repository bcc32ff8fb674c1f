"""Unit tests for cat_service: create-and-notify ordering and partial-failure policy."""

import time
import unittest
from unittest.mock import MagicMock

from adapter.fake.cat_repository import FakeCatRepository
from adapter.fake.subscriber import FakeSubscriber
from domain.model.access import AccessRequest
from domain.model.cat import Cat
from domain.model.errors import (
    ForbiddenError,
    PersistenceError,
    UnauthorizedError,
    ValidationError,
)
from services.access_policy import AccessPolicy
from services.cat_service import CAT_CREATED_EVENT, create_cat, list_cats, validate_cat
from services.notification_hub import NotificationHub
from services.token_service import TokenService

VALID_PAYLOAD = {"name": "Tom", "age": 3, "breed": "Siamese"}


class TestValidateCat(unittest.TestCase):

    def test_valid_payload_becomes_unsaved_cat(self):
        self.assertEqual(validate_cat(VALID_PAYLOAD), Cat(name="Tom", age=3, breed="Siamese"))

    def test_name_length_bounds(self):
        self.assertEqual(validate_cat({**VALID_PAYLOAD, "name": ""}).name, "")
        self.assertEqual(validate_cat({**VALID_PAYLOAD, "name": "Fluf"}).name, "Fluf")
        with self.assertRaises(ValidationError) as context:
            validate_cat({**VALID_PAYLOAD, "name": "Fluffy"})
        self.assertEqual(context.exception.errors[0]["field"], "name")

    def test_age_must_be_integer(self):
        for age in ["3", 3.5, True, None]:
            with self.subTest(age=age):
                with self.assertRaises(ValidationError):
                    validate_cat({**VALID_PAYLOAD, "age": age})

    def test_age_must_fit_a_64_bit_integer(self):
        self.assertEqual(validate_cat({**VALID_PAYLOAD, "age": 2 ** 63 - 1}).age, 2 ** 63 - 1)
        for age in [2 ** 63, -(2 ** 63) - 1, 10 ** 20]:
            with self.subTest(age=age):
                with self.assertRaises(ValidationError) as context:
                    validate_cat({**VALID_PAYLOAD, "age": age})
                self.assertEqual(context.exception.errors[0]["field"], "age")

    def test_breed_must_be_string(self):
        with self.assertRaises(ValidationError):
            validate_cat({**VALID_PAYLOAD, "breed": 42})

    def test_missing_fields_are_reported(self):
        with self.assertRaises(ValidationError) as context:
            validate_cat({})
        fields = {e["field"] for e in context.exception.errors}
        self.assertEqual(fields, {"name", "age", "breed"})

    def test_non_object_payload_is_rejected(self):
        for payload in [None, [], "cat"]:
            with self.subTest(payload=payload):
                with self.assertRaises(ValidationError):
                    validate_cat(payload)


class TestCreateCat(unittest.IsolatedAsyncioTestCase):

    async def asyncSetUp(self):
        self.tokens = TokenService("tests-secret-key")
        self.policy = AccessPolicy(self.tokens)
        self.repo = FakeCatRepository()
        self.hub = NotificationHub(send_timeout=1.0)
        self.subscriber = FakeSubscriber("s1")
        await self.hub.subscribe(self.subscriber)

    def _admin(self) -> AccessRequest:
        token, _ = self.tokens.issue("admin@example.com", role="admin")
        return AccessRequest(token=token, role="admin")

    async def _create(self, payload, access, repo=None, notifier=None, **kwargs):
        return await create_cat(
            payload,
            access,
            repo=repo or self.repo,
            policy=self.policy,
            notifier=notifier or self.hub,
            **kwargs,
        )

    async def test_create_persists_and_returns_stored_cat(self):
        cat = await self._create(VALID_PAYLOAD, self._admin())

        self.assertIsNotNone(cat.id)
        self.assertEqual(self.repo.list_all(), [cat])

    async def test_create_broadcasts_created_event(self):
        cat = await self._create(VALID_PAYLOAD, self._admin())
        await self.hub.drain()

        self.assertEqual(self.subscriber.events(CAT_CREATED_EVENT), [cat.to_dict()])

    async def test_each_created_cat_listed_exactly_once(self):
        created = [
            await self._create({"name": n, "age": i, "breed": "x"}, self._admin())
            for i, n in enumerate(["a", "bb", "ccc", "dddd"])
        ]

        listed = self.repo.list_all()
        for cat in created:
            self.assertEqual(listed.count(cat), 1)

    async def test_invalid_payload_touches_neither_store_nor_hub(self):
        repo = MagicMock()
        notifier = MagicMock()

        with self.assertRaises(ValidationError):
            await self._create({**VALID_PAYLOAD, "name": "TooLong"}, self._admin(), repo=repo, notifier=notifier)

        repo.insert.assert_not_called()
        notifier.publish.assert_not_called()

    async def test_validation_precedes_authorization(self):
        with self.assertRaises(ValidationError):
            await self._create({"age": "old"}, AccessRequest())

    async def test_missing_token_is_rejected_before_persist(self):
        repo = MagicMock()

        with self.assertRaises(ForbiddenError):
            await self._create(VALID_PAYLOAD, AccessRequest(), repo=repo)
        repo.insert.assert_not_called()

    async def test_wrong_role_is_forbidden(self):
        token, _ = self.tokens.issue("a@example.com", role="viewer")

        with self.assertRaises(ForbiddenError):
            await self._create(VALID_PAYLOAD, AccessRequest(token=token, role="viewer"))
        self.assertEqual(self.repo.list_all(), [])

    async def test_forged_role_with_bad_token_is_unauthorized(self):
        with self.assertRaises(UnauthorizedError):
            await self._create(VALID_PAYLOAD, AccessRequest(token="garbage", role="admin"))

    async def test_persistence_failure_never_notifies(self):
        repo = MagicMock()
        repo.insert.side_effect = PersistenceError("disk full")
        notifier = MagicMock()

        with self.assertRaises(PersistenceError):
            await self._create(VALID_PAYLOAD, self._admin(), repo=repo, notifier=notifier)

        notifier.publish.assert_not_called()

    async def test_persist_timeout_surfaces_as_persistence_error(self):
        repo = MagicMock()
        repo.insert.side_effect = lambda cat: time.sleep(0.2) or cat
        notifier = MagicMock()

        with self.assertRaises(PersistenceError):
            await self._create(VALID_PAYLOAD, self._admin(), repo=repo, notifier=notifier, persist_timeout=0.05)
        notifier.publish.assert_not_called()

    async def test_notification_failure_does_not_fail_write(self):
        notifier = MagicMock()
        notifier.publish.side_effect = RuntimeError("no event loop")

        with self.assertLogs('services.cat_service', level='WARNING'):
            cat = await self._create(VALID_PAYLOAD, self._admin(), notifier=notifier)

        self.assertEqual(self.repo.list_all(), [cat])

    async def test_dead_subscriber_does_not_fail_write(self):
        self.subscriber.fail_with = ConnectionError("gone")

        cat = await self._create(VALID_PAYLOAD, self._admin())
        with self.assertLogs('services.notification_hub', level='WARNING'):
            await self.hub.drain()

        self.assertEqual(self.repo.list_all(), [cat])

    async def test_persist_completes_before_publish(self):
        calls = []
        repo = MagicMock()
        repo.insert.side_effect = lambda cat: calls.append("insert") or Cat(id=1, name=cat.name, age=cat.age, breed=cat.breed)
        notifier = MagicMock()
        notifier.publish.side_effect = lambda event, data: calls.append("publish")

        await self._create(VALID_PAYLOAD, self._admin(), repo=repo, notifier=notifier)

        self.assertEqual(calls, ["insert", "publish"])
        notifier.publish.assert_called_once_with(CAT_CREATED_EVENT, {"id": 1, "name": "Tom", "age": 3, "breed": "Siamese"})


class TestListCats(unittest.IsolatedAsyncioTestCase):

    async def asyncSetUp(self):
        self.tokens = TokenService("tests-secret-key")
        self.policy = AccessPolicy(self.tokens)
        self.repo = FakeCatRepository()
        self.repo.insert(Cat(name="Tom", age=3, breed="Siamese"))

    async def test_list_requires_token(self):
        with self.assertRaises(UnauthorizedError):
            await list_cats(AccessRequest(), repo=self.repo, policy=self.policy)

    async def test_list_with_token_returns_all(self):
        token, _ = self.tokens.issue("a@example.com")

        cats = await list_cats(AccessRequest(token=token), repo=self.repo, policy=self.policy)

        self.assertEqual([c.name for c in cats], ["Tom"])

    async def test_list_is_restartable_snapshot(self):
        token, _ = self.tokens.issue("a@example.com")
        access = AccessRequest(token=token)

        first = await list_cats(access, repo=self.repo, policy=self.policy)
        self.repo.insert(Cat(name="Kit", age=1, breed="Tabby"))
        second = await list_cats(access, repo=self.repo, policy=self.policy)

        self.assertEqual(len(first), 1)
        self.assertEqual(len(second), 2)


if __name__ == '__main__':
    unittest.main()
