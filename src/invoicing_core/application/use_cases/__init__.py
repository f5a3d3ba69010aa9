"""Use cases - one module per operation, each exposing execute()."""
