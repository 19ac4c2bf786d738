"""Matching engine: validation, field extraction and the single/loop matchers."""
