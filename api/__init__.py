"""HTTP surface for demand letter templates and generation."""
