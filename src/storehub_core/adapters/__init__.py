"""Reference adapters that need no external infrastructure."""
