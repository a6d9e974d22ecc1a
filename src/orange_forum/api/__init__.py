"""HTTP surface of the forum."""
