"""
Simple examples demonstrating the SMS Banking Engine.
"""

import logging
from datetime import datetime, timedelta

from smsbanking_engine import (
    BankPatternRegistry,
    TransactionExtractor,
    DeduplicationEngine,
    CategorySuggestionEngine,
    RawMessage,
    Rejected,
    run_sms_pipeline,
)

if __name__ == "__main__":
    logging.basicConfig(
        level=logging.DEBUG,
        format="%(asctime)s - %(levelname)s - %(message)s"
    )

# Example 1: Sender resolution
print("=" * 60)
print("Example 1: Sender Resolution")
print("=" * 60)

registry = BankPatternRegistry()

for sender in ["VM-HDFCBK", "JD-SBIINB-S", "AX-IPPBSM", "BZ-HDFCBANKX", "VK-UNKNOWN"]:
    resolution = registry.resolve(sender)
    bank = resolution.identity.display_name if resolution.identity else "-"
    rules = "override" if resolution.rules.is_override else "generic"
    print(f"  {sender:15} -> {bank:12} ({resolution.matched_by}, {rules} rules)")

# Example 2: Extraction
print("\n" + "=" * 60)
print("Example 2: Transaction Extraction")
print("=" * 60)

extractor = TransactionExtractor(registry)
now = datetime(2026, 1, 3, 10, 0, 0)

messages = [
    RawMessage("1", "VM-SBIINB", "Rs.500.00 debited from A/c XX1234 on 03-01-26. Avl Bal Rs.10000.00. Ref No 123456789012", now),
    RawMessage("2", "VM-HDFCBK", "Rs.250.00 spent on HDFC Bank Card x3255 at SWIGGY on 2026-01-03", now),
    RawMessage("3", "VM-PAYTMB", "Rs 1,200 received from RAHUL KUMAR via UPI. UPI Ref: 401234567890", now),
    RawMessage("4", "VM-HDFCBK", "Your OTP for transaction of Rs.2,000 is 482910. Do not share.", now),
]

for message in messages:
    result = extractor.extract(message)
    if isinstance(result, Rejected):
        print(f"  [{message.message_id}] rejected: {result.reason.value}")
    else:
        print(
            f"  [{message.message_id}] {result.direction.value:6} Rs.{result.amount} "
            f"merchant={result.merchant} ref={result.reference_number} method={result.payment_method}"
        )

# Example 3: Deduplication
print("\n" + "=" * 60)
print("Example 3: Deduplication")
print("=" * 60)

dedup = DeduplicationEngine()
first = extractor.extract(RawMessage("a", "VM-HDFCBK", "Rs.250.00 spent at SWIGGY on card x3255", now))
again = extractor.extract(RawMessage("b", "VM-HDFCBK", "Rs.250.00 spent at SWIGGY on card x3255", now + timedelta(seconds=30)))
print(f"  Re-delivery 30s later is duplicate: {dedup.is_duplicate_of(again, first)}")
print(f"  Unique after dedupe: {len(dedup.dedupe([first, again]))}")

# Example 4: Category suggestions
print("\n" + "=" * 60)
print("Example 4: Category Suggestions")
print("=" * 60)

engine = CategorySuggestionEngine()
swiggy = extractor.extract(messages[1])
for suggestion in engine.suggest(swiggy):
    print(f"  {suggestion.category.name:20} {suggestion.confidence:.3f} {suggestion.confidence_level.value:6} {suggestion.reason}")

engine.record_categorization(swiggy, "food")
print("\n  After recording one categorization:")
for suggestion in engine.suggest(swiggy):
    print(f"  {suggestion.category.name:20} {suggestion.confidence:.3f} {suggestion.confidence_level.value:6} {suggestion.reason}")

# Example 5: Full pipeline
print("\n" + "=" * 60)
print("Example 5: Full Pipeline")
print("=" * 60)

result = run_sms_pipeline(messages)
print(f"  Stats: {result['stats']}")
print(f"  Rejections: {result['rejection_summary']}")

print("\n" + "=" * 60)
print("✓ All examples completed successfully!")
print("=" * 60)
