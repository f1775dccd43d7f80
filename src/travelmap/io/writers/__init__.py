"""File writers for cluster summaries."""
