"""Matcher description and record schema."""
