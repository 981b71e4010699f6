"""
Test suite for SMS sender resolution.

Tests that carrier-decorated sender IDs resolve to the right institution,
that unknown senders fall back to the generic rules, and that broken
registry data fails at construction.
"""

import unittest

from smsbanking_engine.registry.bank_registry import (
    BankIdentity,
    BankPatternRegistry,
    DuplicateSenderAliasError,
    ExtractionRuleSet,
    GENERIC,
    InvalidPatternError,
    OverrideRules,
    bare_sender_id,
)


class TestSenderResolution(unittest.TestCase):
    """Test cases for resolve()."""

    def setUp(self):
        """Set up test fixtures."""
        self.registry = BankPatternRegistry()

    def test_exact_alias(self):
        """Test a sender ID listed verbatim."""
        resolution = self.registry.resolve("VM-HDFCBK")

        self.assertEqual(resolution.identity.canonical_name, "HDFC Bank")
        self.assertEqual(resolution.identity.display_name, "HDFC")
        self.assertEqual(resolution.matched_by, "exact")
        self.assertIs(resolution.rules, GENERIC)

    def test_case_and_whitespace_are_ignored(self):
        """Test that sender IDs are trimmed and uppercased."""
        resolution = self.registry.resolve("  vm-hdfcbk ")

        self.assertEqual(resolution.identity.canonical_name, "HDFC Bank")
        self.assertEqual(resolution.matched_by, "exact")

    def test_carrier_prefix_and_trai_suffix_stripped(self):
        """Test a new carrier prefix plus TRAI category suffix."""
        resolution = self.registry.resolve("JD-HDFCBK-S")

        self.assertEqual(resolution.identity.canonical_name, "HDFC Bank")
        self.assertEqual(resolution.matched_by, "bare")

    def test_unlisted_carrier_prefix(self):
        """Test a bank alias behind a carrier prefix not in the table."""
        resolution = self.registry.resolve("JM-SBIINB")

        self.assertEqual(resolution.identity.canonical_name, "State Bank of India")
        self.assertEqual(resolution.matched_by, "bare")

    def test_containment_uses_longest_alias(self):
        """Test conservative containment matching."""
        resolution = self.registry.resolve("BZ-HDFCBANKX")

        self.assertEqual(resolution.identity.canonical_name, "HDFC Bank")
        self.assertEqual(resolution.matched_by, "contains")

    def test_short_alias_never_matches_by_containment(self):
        """Test that 'SBI' inside an unrelated ID is not enough."""
        resolution = self.registry.resolve("AB-XSBIX")

        self.assertIsNone(resolution.identity)
        self.assertEqual(resolution.matched_by, "none")

    def test_unknown_sender_uses_generic_rules(self):
        """Test that an unknown sender is not an error."""
        resolution = self.registry.resolve("VK-UNKNOWN")

        self.assertIsNone(resolution.identity)
        self.assertFalse(resolution.is_known)
        self.assertIs(resolution.rules, GENERIC)
        self.assertEqual(resolution.matched_by, "none")

    def test_empty_sender(self):
        """Test an empty or missing sender."""
        self.assertEqual(self.registry.resolve("").matched_by, "none")
        self.assertEqual(self.registry.resolve(None).matched_by, "none")

    def test_lower_min_contains_alias_length(self):
        """Test the containment length is configurable."""
        registry = BankPatternRegistry(config={"min_contains_alias_length": 3})
        resolution = registry.resolve("AB-XSBIX")

        self.assertEqual(resolution.identity.canonical_name, "State Bank of India")
        self.assertEqual(resolution.matched_by, "contains")

    def test_bare_sender_id(self):
        """Test stripping of carrier decorations."""
        self.assertEqual(bare_sender_id("JD-HDFCBK-S"), "HDFCBK")
        self.assertEqual(bare_sender_id("VM-ICICIB"), "ICICIB")
        self.assertEqual(bare_sender_id("HDFCBK"), "HDFCBK")


class TestRuleSetOverrides(unittest.TestCase):
    """Test cases for institution-specific rule sets."""

    def setUp(self):
        """Set up test fixtures."""
        self.registry = BankPatternRegistry()

    def test_icici_has_merchant_override(self):
        """Test ICICI card alerts get their own merchant pattern."""
        rules = self.registry.resolve("VM-ICICIB").rules

        self.assertIsInstance(rules, OverrideRules)
        self.assertTrue(rules.is_override)
        self.assertIsNotNone(rules.rule_set.compiled("merchant_pattern"))
        self.assertIsNone(rules.rule_set.compiled("amount_pattern"))

    def test_ippb_has_amount_balance_reference_overrides(self):
        """Test India Post Payments Bank overrides."""
        rules = self.registry.resolve("AD-IPPBSM").rules

        self.assertTrue(rules.is_override)
        for name in ("amount_pattern", "balance_pattern", "reference_pattern"):
            self.assertIsNotNone(rules.rule_set.compiled(name), name)

    def test_pattern_that_does_not_compile(self):
        """Test a broken regex fails at load time."""
        with self.assertRaises(InvalidPatternError):
            ExtractionRuleSet(amount_pattern=r"Rs\.(\d+")

    def test_pattern_without_capturing_group(self):
        """Test a regex with nothing to capture fails at load time."""
        with self.assertRaises(InvalidPatternError):
            ExtractionRuleSet(amount_pattern=r"Rs\.\d+")

    def test_invalid_pattern_is_value_error(self):
        """Test the error hierarchy."""
        self.assertTrue(issubclass(InvalidPatternError, ValueError))

    def test_unknown_rule_set_key(self):
        """Test a typo in registry data is caught."""
        with self.assertRaises(InvalidPatternError):
            ExtractionRuleSet.from_dict({"amount_regex": r"(\d+)"})

    def test_broken_definition_fails_registry_construction(self):
        """Test a registry with a broken override cannot be built."""
        definitions = {
            "Broken Bank": {
                "display_name": "Broken",
                "sender_ids": ["BRKBNK"],
                "patterns": {"amount_pattern": "("},
            },
        }
        with self.assertRaises(InvalidPatternError):
            BankPatternRegistry(definitions=definitions)


class TestRegistration(unittest.TestCase):
    """Test cases for registering institutions."""

    def test_default_registry_size(self):
        """Test all supported institutions are loaded."""
        registry = BankPatternRegistry()

        self.assertEqual(registry.bank_count, 31)
        self.assertEqual(len(registry.all_banks()), 31)
        self.assertEqual(registry.all_banks()[0].canonical_name, "HDFC Bank")

    def test_custom_definitions(self):
        """Test a registry built from caller data."""
        registry = BankPatternRegistry(definitions={
            "Test Bank": {"display_name": "Test", "sender_ids": ["TSTBNK", "VM-TSTBNK"]},
        })

        self.assertEqual(registry.bank_count, 1)
        self.assertEqual(registry.resolve("AX-TSTBNK-T").identity.display_name, "Test")

    def test_duplicate_alias_rejected(self):
        """Test an alias claimed by two institutions."""
        registry = BankPatternRegistry()
        impostor = BankIdentity("Impostor Bank", "Impostor", frozenset({"HDFCBK"}))

        with self.assertRaises(DuplicateSenderAliasError):
            registry.register_bank(impostor)

    def test_duplicate_bare_alias_rejected(self):
        """Test an alias that only collides once carrier decorations are stripped."""
        registry = BankPatternRegistry()
        impostor = BankIdentity("Impostor Bank", "Impostor", frozenset({"XX-HDFCBK"}))

        with self.assertRaises(DuplicateSenderAliasError):
            registry.register_bank(impostor)

    def test_register_bank_with_override(self):
        """Test registering an institution with its own rules."""
        registry = BankPatternRegistry(definitions={})
        rule_set = ExtractionRuleSet(amount_pattern=r"(?i)Amount:\s*([\d,.]+)")
        registry.register_bank(BankIdentity("New Bank", "New", frozenset({"NEWBNK"})), rule_set)

        resolution = registry.resolve("VM-NEWBNK")
        self.assertEqual(resolution.identity.canonical_name, "New Bank")
        self.assertIs(resolution.rules.rule_set, rule_set)

    def test_invalid_min_contains_alias_length(self):
        """Test configuration validation."""
        with self.assertRaises(ValueError):
            BankPatternRegistry(config={"min_contains_alias_length": 0})


if __name__ == "__main__":
    unittest.main()
