"""Tests for matcher.py"""

import ddt

from vaccine_check import codes, matcher
from vaccine_check.decoder import NormalizedImmunization
from tests import utils


@ddt.ddt
class TestMatcher(utils.AsyncTestCase):
    """Tests for matching a decoded immunization against a code table"""

    def setUp(self):
        super().setUp()
        self.table = codes.CodeTable({"208": "Pfizer", "59676-580-15": "Janssen", "cvx-a": "Lower"})

    def test_hit(self):
        outcome = matcher.match(NormalizedImmunization("208", "2021-03-01"), self.table)
        self.assertEqual(matcher.MatchOutcome("Pfizer", "2021-03-01", "208"), outcome)
        self.assertEqual("Pfizer. 2021-03-01", outcome.message)

    def test_message_keeps_date_precision(self):
        first = matcher.match(NormalizedImmunization("208", "2021-03-01T09:00:00Z"), self.table)
        second = matcher.match(NormalizedImmunization("208", "2021-03-02T09:00:00Z"), self.table)
        self.assertEqual("Pfizer. 2021-03-01T09:00:00Z", first.message)
        self.assertNotEqual(first.message, second.message)

    @ddt.data("207", "999", "", "CVX-A", "cvx-a ", " 208", "208.0", "59676-580-1")
    def test_miss(self, code):
        self.assertIsNone(matcher.match(NormalizedImmunization(code, "2021-03-01"), self.table))

    def test_accepts_plain_dict(self):
        outcome = matcher.match(NormalizedImmunization("207", "2021-03-01"), {"207": "Moderna"})
        self.assertEqual("Moderna. 2021-03-01", outcome.message)

    def test_empty_table(self):
        self.assertIsNone(
            matcher.match(NormalizedImmunization("208", "2021-03-01"), codes.CodeTable())
        )
