import unittest
from unittest.mock import MagicMock

from tcsion.api.member_api import MemberAPI
from tcsion.exceptions import UpstreamMalformedError


class TestMemberAPI(unittest.TestCase):
    """Unit tests for the MemberAPI class."""

    def setUp(self):
        """Set up test fixtures before each test method."""
        self.api = MemberAPI('https://example.com', {'Cookie': 'sid=abc'})

    def test_search_members_success(self):
        """Test a page of members is requested and parsed."""
        self.api.get = MagicMock(return_value=[
            {'usrloginid': 'u1', 'usrname': 'User One'},
            {'usrloginid': 'u2'},
        ])

        result = self.api.search_members('g1', 3)

        self.api.get.assert_called_once_with(
            'LX/search/search_members',
            params={'c_id': 'g1', 'req_type': 'api', 'page': 3},
        )
        self.assertEqual([member.login_id for member in result], ['u1', 'u2'])
        self.assertEqual(result[0].raw['usrname'], 'User One')

    def test_search_members_empty_page(self):
        """Test an empty page parses to an empty list."""
        self.api.get = MagicMock(return_value=[])

        self.assertEqual(self.api.search_members('g1', 2), [])

    def test_search_members_not_a_list(self):
        """Test a non-list body is malformed."""
        self.api.get = MagicMock(return_value={'members': []})

        with self.assertRaises(UpstreamMalformedError):
            self.api.search_members('g1', 1)

    def test_search_members_missing_login(self):
        """Test a member without usrloginid is malformed."""
        self.api.get = MagicMock(return_value=[{'usrname': 'Nobody'}])

        with self.assertRaises(UpstreamMalformedError):
            self.api.search_members('g1', 1)


if __name__ == '__main__':
    unittest.main()
