"""Command-line interface for SQLPager."""
