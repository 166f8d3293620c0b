"""
Test cases for CreateSubmitter goal parsing and status reporting.
"""
import unittest
from unittest.mock import AsyncMock, Mock

from afunding.adapters.create_submitter import CreateSubmitter, parse_goal
from afunding.constants import CREATE_SUCCESS_MESSAGE, FN_CREATE_CAMPAIGN
from afunding.errors import ParseError, RpcCallError, TransportError
from afunding.store import ReactiveStore
from ledger_fakes import CREATOR_C

SENDER = CREATOR_C.lower()
TX_HASH = "0x" + "ab" * 32


class TestParseGoal(unittest.TestCase):

    def test_plain_decimal(self):
        self.assertEqual(parse_goal("100"), 100)
        self.assertEqual(parse_goal("007"), 7)
        self.assertEqual(parse_goal(str((1 << 256) - 1)), (1 << 256) - 1)

    def test_unparseable_input_becomes_zero(self):
        for goal in ("", "abc", "12.5", "-5", "+5", " 5", "5 ", "1_000", "1e3", "0x10", "٥", str(1 << 256)):
            with self.subTest(goal=goal):
                self.assertEqual(parse_goal(goal), 0)


class TestCreateSubmitter(unittest.IsolatedAsyncioTestCase):

    def setUp(self):
        self.contract = Mock()
        self.contract.transact = AsyncMock(return_value=TX_HASH)
        self.submitter = CreateSubmitter(self.contract, SENDER)

    async def test_submit_sends_parameters_from_fixed_sender(self):
        status = await self.submitter.submit("Title", "Description", "250")

        self.contract.transact.assert_awaited_once_with(
            FN_CREATE_CAMPAIGN, "Title", "Description", 250, sender=CREATOR_C
        )
        self.assertEqual(status, CREATE_SUCCESS_MESSAGE)
        self.assertEqual(self.submitter.status(), CREATE_SUCCESS_MESSAGE)

    async def test_non_numeric_goal_submits_zero(self):
        await self.submitter.submit("Title", "Description", "lots")

        args = self.contract.transact.await_args[0]
        self.assertEqual(args[3], 0)

    async def test_rpc_failure_becomes_status_message(self):
        self.contract.transact.side_effect = RpcCallError(FN_CREATE_CAMPAIGN, ValueError("insufficient funds"))

        status = await self.submitter.submit("Title", "Description", "1")

        self.assertTrue(status.startswith("Error: "))
        self.assertIn("insufficient funds", status)
        self.assertEqual(self.submitter.status(), status)

    async def test_transport_failure_becomes_status_message(self):
        self.contract.transact.side_effect = TransportError("cannot reach http://127.0.0.1:8545")

        status = await self.submitter.submit("Title", "Description", "1")

        self.assertEqual(status, "Error: cannot reach http://127.0.0.1:8545")

    async def test_status_replaces_previous(self):
        self.assertIsNone(self.submitter.status())

        self.contract.transact.side_effect = RpcCallError(FN_CREATE_CAMPAIGN, ValueError("reverted"))
        await self.submitter.submit("A", "", "1")
        self.contract.transact.side_effect = None
        await self.submitter.submit("B", "", "1")

        self.assertEqual(self.submitter.status(), CREATE_SUCCESS_MESSAGE)

    async def test_status_published_to_store(self):
        store = ReactiveStore(None)
        seen = []
        store.subscribe(seen.append)
        submitter = CreateSubmitter(self.contract, SENDER, status_store=store)

        await submitter.submit("Title", "Description", "1")

        self.assertEqual(seen, [CREATE_SUCCESS_MESSAGE])

    def test_sender_case_is_ignored(self):
        for sender in (CREATOR_C.upper().replace("0X", "0x"), CREATOR_C.replace("b", "B", 1)):
            with self.subTest(sender=sender):
                self.assertEqual(CreateSubmitter(self.contract, sender).sender_address, CREATOR_C)

    def test_invalid_sender_is_rejected(self):
        for sender in ("", "0x1234", "not an address", None):
            with self.subTest(sender=sender):
                with self.assertRaises(ParseError):
                    CreateSubmitter(self.contract, sender)


if __name__ == "__main__":
    unittest.main()
