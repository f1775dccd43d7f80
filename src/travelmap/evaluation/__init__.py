"""Evaluation helpers for comparing clustering strategies."""
