import unittest
from unittest.mock import MagicMock, call, patch

from builders import make_members
from tcsion.api.member_api import MemberAPI
from tcsion.api.member_pager import MemberPager
from tcsion.exceptions import (
    UpstreamAuthRejectedError,
    UpstreamMalformedError,
    UpstreamNetworkError,
    UpstreamServerError,
)


class TestMemberPager(unittest.TestCase):
    """Test cases for MemberPager pagination and its exit conditions."""

    def setUp(self):
        """Set up a pager around a mocked MemberAPI."""
        self.logger_mock = patch('tcsion.api.member_pager.logger').start()
        self.member_api = MagicMock(spec=MemberAPI)
        self.pager = MemberPager(self.member_api)

    def tearDown(self):
        patch.stopall()

    # ----- Exit predicates -----

    def test_is_exhausted(self):
        self.assertTrue(MemberPager.is_exhausted([]))
        self.assertFalse(MemberPager.is_exhausted(make_members('u1')))

    def test_is_soft_exhaustion(self):
        self.assertTrue(MemberPager.is_soft_exhaustion(UpstreamServerError(500)))
        self.assertFalse(MemberPager.is_soft_exhaustion(UpstreamNetworkError('down')))

    def test_is_failure(self):
        self.assertFalse(MemberPager.is_failure(UpstreamServerError(502)))
        self.assertTrue(MemberPager.is_failure(UpstreamMalformedError('bad')))
        self.assertTrue(MemberPager.is_failure(UpstreamAuthRejectedError(403)))
        self.assertTrue(MemberPager.is_failure(RuntimeError('unexpected')))

    # ----- fetch_all_members -----

    def test_fetch_all_members_until_empty_page(self):
        """Test N non-empty pages then an empty page give N+1 calls and all members."""
        pages = [make_members('u1', 'u2'), make_members('u3'), make_members('u4', 'u5'), []]
        self.member_api.search_members.side_effect = pages

        result = self.pager.fetch_all_members('g1')

        self.assertEqual([m.login_id for m in result], ['u1', 'u2', 'u3', 'u4', 'u5'])
        self.assertEqual(self.member_api.search_members.call_count, 4)
        self.member_api.search_members.assert_has_calls(
            [call('g1', 1), call('g1', 2), call('g1', 3), call('g1', 4)]
        )

    def test_fetch_all_members_first_page_empty(self):
        """Test a community without members makes a single call."""
        self.member_api.search_members.return_value = []

        self.assertEqual(self.pager.fetch_all_members('g1'), [])
        self.member_api.search_members.assert_called_once_with('g1', 1)

    def test_fetch_all_members_server_error_is_soft_exhaustion(self):
        """Test a server error ends paging and keeps accumulated members."""
        self.member_api.search_members.side_effect = [
            make_members('u1'),
            UpstreamServerError(500),
        ]

        result = self.pager.fetch_all_members('g1')

        self.assertEqual([m.login_id for m in result], ['u1'])
        self.assertEqual(self.member_api.search_members.call_count, 2)
        self.logger_mock.exception.assert_not_called()

    def test_fetch_all_members_other_failure_truncates(self):
        """Test any other failure is logged and truncates the list."""
        self.member_api.search_members.side_effect = [
            make_members('u1', 'u2'),
            UpstreamMalformedError('not json'),
            make_members('u3'),
        ]

        result = self.pager.fetch_all_members('g1')

        self.assertEqual([m.login_id for m in result], ['u1', 'u2'])
        self.assertEqual(self.member_api.search_members.call_count, 2)
        self.logger_mock.exception.assert_called_once()

    def test_fetch_all_members_consults_exit_predicates(self):
        """Test the error branch is decided by is_soft_exhaustion and is_failure."""
        error = UpstreamNetworkError('down')
        self.member_api.search_members.side_effect = error

        with patch.object(MemberPager, 'is_failure', wraps=MemberPager.is_failure) as failure_mock:
            self.assertEqual(self.pager.fetch_all_members('g1'), [])

        failure_mock.assert_called_once_with(error)
        self.logger_mock.exception.assert_called_once()

    def test_fetch_all_members_network_failure_on_first_page(self):
        """Test a failure on the first page returns an empty list without raising."""
        self.member_api.search_members.side_effect = UpstreamNetworkError('down')

        self.assertEqual(self.pager.fetch_all_members('g1'), [])

    def test_fetch_all_members_page_limit(self):
        """Test paging stops at max_pages even if pages keep coming."""
        pager = MemberPager(self.member_api, max_pages=3)
        self.member_api.search_members.return_value = make_members('u1')

        result = pager.fetch_all_members('g1')

        self.assertEqual(len(result), 3)
        self.assertEqual(self.member_api.search_members.call_count, 3)
        self.logger_mock.warning.assert_called_once()


if __name__ == '__main__':
    unittest.main()
