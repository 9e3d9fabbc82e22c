"""Pricing models (closed-form formulas, no market-data plumbing)."""
