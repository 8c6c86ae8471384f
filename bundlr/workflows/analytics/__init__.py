"""Analytics workflows."""

from bundlr.workflows.analytics.fetch_records_wf import PAGE_SIZE, TransactionStore, fetch_all_records
from bundlr.workflows.analytics.pairing_analytics_wf import compute_pairing_analytics

__all__ = ["PAGE_SIZE", "TransactionStore", "compute_pairing_analytics", "fetch_all_records"]
