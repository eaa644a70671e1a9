"""Infrastructure adapters for swachh_identity."""
