"""Selection, building, delivery and the blocking display session."""
