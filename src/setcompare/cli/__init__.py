"""Command line interface for setcompare."""
