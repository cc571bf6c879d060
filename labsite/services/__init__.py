"""Cross-entity services built on top of the repositories."""
