"""Data models for stacks, sweep results and teardown runs."""
