"""Rating domain modules."""
