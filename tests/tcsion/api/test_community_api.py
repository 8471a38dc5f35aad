import unittest
from unittest.mock import MagicMock

from tcsion.api.community_api import CommunityAPI
from tcsion.exceptions import UpstreamMalformedError
from tcsion.models.community import CommunityListEntry


class TestCommunityAPI(unittest.TestCase):
    """Unit tests for the CommunityAPI class."""

    def setUp(self):
        """Set up test fixtures before each test method."""
        self.api = CommunityAPI('https://example.com', {'Authorization': 'Bearer token123'})

    def test_get_communities_success(self):
        """Test communities are requested with the period and parsed in order."""
        self.api.get = MagicMock(return_value=[
            {'slug': 'g1', 'member_count': 5, 'name': 'Prime - June 2024 Cohort'},
            {'slug': 'g2', 'member_count': 0, 'name': 'Prime - June 2024 Batch B'},
        ])

        result = self.api.get_communities('June', 'sec123')

        self.api.get.assert_called_once_with(
            'LX/lms_integration/enroll_community_course.json',
            params={'mtop_sec_key': 'sec123', 'type': 'community', 'page': 1, 'name': 'June'},
        )
        self.assertEqual(result, [
            CommunityListEntry('g1', 5, 'Prime - June 2024 Cohort'),
            CommunityListEntry('g2', 0, 'Prime - June 2024 Batch B'),
        ])

    def test_get_communities_string_count(self):
        """Test numeric string counts are accepted."""
        self.api.get = MagicMock(return_value=[
            {'slug': 'g1', 'member_count': '12', 'name': 'Prime - May 2024'},
        ])

        result = self.api.get_communities('May')

        self.assertEqual(result[0].member_count, 12)

    def test_get_communities_integral_float_count(self):
        """Test a whole-number float count is accepted as an int."""
        self.api.get = MagicMock(return_value=[
            {'slug': 'g1', 'member_count': 5.0, 'name': 'Prime - May 2024'},
        ])

        result = self.api.get_communities('May')

        self.assertEqual(result[0].member_count, 5)
        self.assertIsInstance(result[0].member_count, int)

    def test_get_communities_empty(self):
        """Test an empty list is a valid answer."""
        self.api.get = MagicMock(return_value=[])

        self.assertEqual(self.api.get_communities('June'), [])

    def test_get_communities_not_a_list(self):
        """Test a non-list body is malformed."""
        self.api.get = MagicMock(return_value={'error': 'invalid key'})

        with self.assertRaises(UpstreamMalformedError):
            self.api.get_communities('June')

    def test_get_communities_entry_missing_slug_is_skipped(self):
        """Test an entry without slug is left out and the others are kept."""
        self.api.get = MagicMock(return_value=[
            {'member_count': 5, 'name': 'Prime - June 2024'},
            {'slug': 'g2', 'member_count': 2, 'name': 'Prime - June 2024 Batch B'},
        ])

        with self.assertLogs('tcsion.api.community_api', level='WARNING'):
            result = self.api.get_communities('June')

        self.assertEqual(result, [CommunityListEntry('g2', 2, 'Prime - June 2024 Batch B')])

    def test_get_communities_entry_bad_count_is_skipped(self):
        """Test non-numeric, boolean, negative, fractional and null counts are skipped."""
        for count in ('many', True, -1, None, 5.9):
            self.api.get = MagicMock(return_value=[
                {'slug': 'g1', 'member_count': 5, 'name': 'Prime - June 2024'},
                {'slug': 'g2', 'member_count': count, 'name': 'Prime - June 2024'},
            ])

            result = self.api.get_communities('June')

            self.assertEqual([entry.slug for entry in result], ['g1'], msg=f"count={count!r}")

    def test_get_communities_non_object_entry_is_skipped(self):
        """Test a non-object element is skipped."""
        self.api.get = MagicMock(return_value=['g1'])

        self.assertEqual(self.api.get_communities('June'), [])


if __name__ == '__main__':
    unittest.main()
