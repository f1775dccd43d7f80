"""File readers producing located entities."""
