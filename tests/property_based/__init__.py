"""Property-based tests for deletion invariants."""
