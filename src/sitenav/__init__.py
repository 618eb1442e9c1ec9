"""sitenav - Hierarchical site navigation with automatic highlighting."""
