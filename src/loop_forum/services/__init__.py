"""Service layer implementing forum operations."""
