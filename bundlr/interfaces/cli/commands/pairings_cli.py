"""
Pairings command: print service co-occurrence and upsell analytics for a date range.

Architecture:
- Uses CLI bootstrap service to get a PairingAnalyticsService instance
- Does NOT depend on running Application (separate process)
- Does NOT access Database or workflows directly
"""

from __future__ import annotations

import argparse
import logging

from bundlr.helpers.exceptions import FetchError
from bundlr.interfaces.cli.cli_ui import InfoPanel, print_error, print_info, print_table
from bundlr.services.infrastructure.cli_bootstrap_svc import get_pairing_analytics_service


def _pct(value: float) -> str:
    return f"{value:.1f}%"


def _money(value: float) -> str:
    return f"${value:,.2f}"


def cmd_pairings(args: argparse.Namespace) -> int:
    """
    Compute pairing analytics for --from..--to and print them as tables.
    Runs standalone without requiring the API server to be running.
    """
    service = get_pairing_analytics_service(top_pairings_limit=args.limit)

    try:
        result = service.compute_pairing_analytics(args.date_from, args.date_to, args.location)
    except ValueError as e:
        print_error(str(e))
        return 1
    except FetchError as e:
        logging.exception("[CLI] Pairing analytics fetch failed")
        print_error(f"Could not load transactions: {e}")
        return 1

    if result.is_empty:
        print_info(f"No data in range {args.date_from} to {args.date_to}")
        return 0

    print_table(
        "Top Service Pairings",
        ["Service A", "Service B", "Visits", "% of multi"],
        [[p.service_a, p.service_b, str(p.count), _pct(p.pct_of_multi_visits)] for p in result.pairings],
        numeric_from=2,
    )
    print_table(
        "Category Pairings",
        ["Category A", "Category B", "Visits", "% of multi"],
        [[p.category_a, p.category_b, str(p.count), _pct(p.pct_of_multi_visits)] for p in result.category_pairings],
        numeric_from=2,
    )
    print_table(
        "Standalone vs Grouped",
        ["Category", "Bookings", "Alone", "Grouped"],
        [
            [r.category, str(r.total_bookings), _pct(r.standalone_rate), _pct(r.grouped_rate)]
            for r in result.standalone_rates
        ],
    )

    strong = {lift.category for lift in service.get_strong_lifts(result)}
    print_table(
        "Revenue Lift",
        ["Category", "Avg solo", "Avg grouped", "Lift", "Lift %"],
        [
            [
                f"[bold green]{lift.category}[/bold green]" if lift.category in strong else lift.category,
                _money(lift.avg_ticket_solo),
                _money(lift.avg_ticket_grouped),
                _money(lift.lift_dollars),
                _pct(lift.lift_pct),
            ]
            for lift in result.revenue_lift
        ],
    )

    suggestions = service.get_bundling_suggestions(result)
    if suggestions:
        InfoPanel.show("Bundling Opportunities", "\n".join(s.message for s in suggestions), "yellow")

    return 0
