"""Push installation registry and finder service."""
