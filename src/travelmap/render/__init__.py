"""Renderer-facing descriptions of clusters."""

from .summary import ClusterSummary, marker_color, selection_to_dict, summarize_clusters

__all__ = ["ClusterSummary", "marker_color", "selection_to_dict", "summarize_clusters"]
