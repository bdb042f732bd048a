"""
Conformance Test Suite

This suite defines the NORMATIVE behavior of the horse_manager engine.
Any compliant implementation MUST pass these tests.

The tests are organized by invariant:
1. geometry.py - Table layout and column widths
2. pricing_rules.py - Effective price rules
3. atomicity.py - All-or-nothing exchanges
4. selection.py - Selection bounds and the "add new" row
5. dialogs.py - One dialog at a time, resolved exactly once

These tests use hypothesis for property-based testing.
"""
