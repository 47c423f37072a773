"""Service layer (business rules)."""
