"""
Test suite for the end-to-end SMS pipeline.
"""

import unittest
from datetime import datetime

from smsbanking_engine import (
    CategorySuggestionEngine,
    RawMessage,
    TransactionExtractor,
    run_sms_pipeline,
)


MESSAGES = [
    {
        "message_id": "sms-1",
        "sender": "VM-SBIINB",
        "body": "Rs.500.00 debited from A/c XX1234 on 03-01-26. Avl Bal Rs.10000.00. Ref No 123456789012",
        "timestamp": "2026-01-03T10:00:00",
    },
    {
        "message_id": "sms-2",
        "sender": "VM-SBIINB",
        "body": "Rs.500.00 debited from A/c XX1234 on 03-01-26. Avl Bal Rs.10000.00. Ref No 123456789012",
        "timestamp": "2026-01-03T10:00:30",
    },
    {
        "message_id": "sms-3",
        "sender": "VM-HDFCBK",
        "body": "Rs.250.00 spent on HDFC Bank Card x3255 at SWIGGY on 2026-01-03",
        "timestamp": "2026-01-03T12:30:00",
    },
    {
        "message_id": "sms-4",
        "sender": "VM-HDFCBK",
        "body": "Your OTP for transaction of Rs.2,000 is 482910. Do not share.",
        "timestamp": "2026-01-03T13:00:00",
    },
]


class TestRunSmsPipeline(unittest.TestCase):
    """Test cases for run_sms_pipeline."""

    def test_pipeline(self):
        result = run_sms_pipeline(MESSAGES)

        self.assertEqual([t["external_id"] for t in result["transactions"]], ["sms-1", "sms-3"])
        self.assertEqual(result["transactions"][0]["amount"], "500.00")
        self.assertEqual(result["transactions"][0]["direction"], "DEBIT")
        self.assertEqual(result["transactions"][0]["balance_after"], "10000.00")
        self.assertEqual(result["rejections"], {"sms-4": "OTP_MESSAGE"})
        self.assertEqual(result["rejection_summary"], {"OTP_MESSAGE": 1})
        self.assertEqual(result["stats"], {
            "total_messages": 4,
            "extracted": 3,
            "rejected": 1,
            "duplicates": 1,
            "failed": 0,
        })

    def test_suggestions(self):
        result = run_sms_pipeline(MESSAGES)

        swiggy = result["suggestions"]["sms-3"]
        self.assertEqual(swiggy[0]["category_id"], "food")
        self.assertEqual(swiggy[0]["category_name"], "Food & Dining")
        self.assertEqual(swiggy[0]["confidence_level"], "LOW")
        self.assertEqual(result["suggestions"]["sms-1"], [])

    def test_custom_engine_and_limit(self):
        engine = CategorySuggestionEngine(config={"weights": {"keyword_match": 1.0}})

        result = run_sms_pipeline(MESSAGES, suggestion_engine=engine, max_suggestions=1)

        swiggy = result["suggestions"]["sms-3"]
        self.assertEqual(len(swiggy), 1)
        self.assertAlmostEqual(swiggy[0]["confidence"], round(1.0 / 14, 4))

    def test_known_transactions(self):
        first = run_sms_pipeline(MESSAGES[:1])
        self.assertEqual(len(first["transactions"]), 1)

        stored = TransactionExtractor().extract(RawMessage(
            "sms-1", "VM-SBIINB", MESSAGES[0]["body"], datetime(2026, 1, 3, 10, 0, 0),
        ))

        result = run_sms_pipeline(MESSAGES[1:], known_transactions=[stored])

        self.assertEqual([t["external_id"] for t in result["transactions"]], ["sms-3"])
        self.assertEqual(result["stats"]["duplicates"], 1)


if __name__ == "__main__":
    unittest.main()
