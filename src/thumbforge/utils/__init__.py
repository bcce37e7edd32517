"""Small helpers shared across Thumbforge modules."""
