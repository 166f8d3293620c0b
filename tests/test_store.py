"""
Test cases for ReactiveStore notification semantics.
"""
import unittest
from unittest.mock import Mock, patch

from afunding.store import ReactiveStore


class TestReactiveStore(unittest.TestCase):

    def setUp(self):
        self.store = ReactiveStore([], name="campaigns")

    def test_initial_value(self):
        self.assertEqual(self.store.get(), [])

    def test_set_replaces_value(self):
        first = [1, 2]
        second = [3]
        self.store.set(first)
        self.store.set(second)
        self.assertIs(self.store.get(), second)

    def test_observers_notified_in_subscription_order(self):
        seen = []
        self.store.subscribe(lambda value: seen.append(("a", value)))
        self.store.subscribe(lambda value: seen.append(("b", value)))

        self.store.set([1])

        self.assertEqual(seen, [("a", [1]), ("b", [1])])

    def test_observer_sees_new_value_from_get(self):
        seen = []
        self.store.subscribe(lambda value: seen.append(self.store.get()))
        self.store.set([5])
        self.assertEqual(seen, [[5]])

    def test_unsubscribe_via_subscription(self):
        observer = Mock()
        subscription = self.store.subscribe(observer)
        subscription.unsubscribe()

        self.store.set([1])

        observer.assert_not_called()
        self.assertEqual(self.store.observer_count, 0)

    def test_same_observer_subscribed_twice(self):
        seen = []
        first = self.store.subscribe(seen.append)
        second = self.store.subscribe(seen.append)

        second.unsubscribe()
        self.store.set([1])
        first.unsubscribe()
        second.unsubscribe()
        self.store.set([2])

        self.assertEqual(seen, [[1]])
        self.assertEqual(self.store.observer_count, 0)

    def test_unsubscribe_by_observer_removes_one_registration(self):
        observer = Mock()
        self.store.subscribe(observer)
        self.store.subscribe(observer)

        self.store.unsubscribe(observer)
        self.store.set([1])

        observer.assert_called_once_with([1])

    def test_unsubscribe_unknown_observer_is_ignored(self):
        self.store.unsubscribe(Mock())
        self.assertEqual(self.store.observer_count, 0)

    def test_failing_observer_does_not_block_others(self):
        failing = Mock(side_effect=RuntimeError("view gone"))
        healthy = Mock()
        self.store.subscribe(failing)
        self.store.subscribe(healthy)

        with patch("afunding.store.logging") as mock_logging:
            self.store.set([1])

        healthy.assert_called_once_with([1])
        mock_logging.error.assert_called_once()
        self.assertEqual(self.store.get(), [1])

    def test_observer_may_unsubscribe_during_notification(self):
        calls = []

        def once(value):
            calls.append(value)
            subscription.unsubscribe()

        subscription = self.store.subscribe(once)
        self.store.set([1])
        self.store.set([2])

        self.assertEqual(calls, [[1]])


if __name__ == "__main__":
    unittest.main()
