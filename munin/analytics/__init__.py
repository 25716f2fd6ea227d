"""Collection statistics and the writing streak."""

from munin.analytics.tools import compute_analytics, export_analytics

__all__ = ["compute_analytics", "export_analytics"]
