"""Application layer - relay use cases."""
