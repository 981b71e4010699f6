"""
Test suite for string similarity.
"""

import unittest

from smsbanking_engine.categorisation.similarity import string_similarity


class TestStringSimilarity(unittest.TestCase):
    """Test cases for normalized Levenshtein similarity."""

    def test_identical(self):
        self.assertEqual(string_similarity("swiggy", "swiggy"), 1.0)
        self.assertEqual(string_similarity("", ""), 1.0)

    def test_empty_against_non_empty(self):
        self.assertEqual(string_similarity("", "swiggy"), 0.0)
        self.assertEqual(string_similarity("swiggy", ""), 0.0)

    def test_known_values(self):
        self.assertAlmostEqual(string_similarity("swigy", "swiggy"), 5 / 6, places=4)
        self.assertAlmostEqual(string_similarity("kitten", "sitting"), 4 / 7, places=4)

    def test_symmetric_and_bounded(self):
        pairs = [("zomato", "zomat0"), ("amazon", "amzn"), ("uber", "ola"), ("a", "abc")]
        for s1, s2 in pairs:
            forward = string_similarity(s1, s2)
            self.assertAlmostEqual(forward, string_similarity(s2, s1))
            self.assertGreaterEqual(forward, 0.0)
            self.assertLessEqual(forward, 1.0)


if __name__ == "__main__":
    unittest.main()
