"""Command line interface for the scheduler factory."""
