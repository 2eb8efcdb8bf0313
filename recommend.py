#!/usr/bin/env python3
"""
CLI for vehicle maintenance recommendations.

Commands:
  recommend    - Show maintenance recommendations, most urgent first
  history      - View service history
  log          - Add a new service entry
  update-miles - Update current vehicle mileage
  rules        - List maintenance category rules
  ack          - Acknowledge a saved recommendation
"""

import argparse
import logging
import sys
from datetime import date
from pathlib import Path
from tabulate import tabulate
from typing import List, Optional, Sequence

from autocare import (
    DEFAULT_RULES,
    CategoryRule,
    ConfigurationError,
    HistoryEntry,
    PriorityBasis,
    Recommendation,
    Skipped,
    acknowledge_recommendation,
    evaluate_rules,
    load_rules,
    load_vehicle,
    save_current_mileage,
    save_history_entry,
    save_recommendations,
    sort_by_priority,
)

# =============================================================================
# Formatting helpers
# =============================================================================


def format_miles(miles: Optional[float]) -> str:
    """Format mileage for display."""
    return f"{miles:,.0f}" if miles is not None else "-"


def format_cost(cost: Optional[float]) -> str:
    """Format cost for display."""
    return f"${cost:,.2f}" if cost is not None else "-"


def format_months(months: Optional[float]) -> str:
    """Format elapsed months for display ('never' when no service date)."""
    if months is None:
        return "-"
    if months == float("inf"):
        return "never"
    return f"{months:.1f}"


def truncate(text: Optional[str], max_len: int = 30) -> str:
    """Truncate text with ellipsis if too long."""
    if text is None:
        return "-"
    if len(text) <= max_len:
        return text
    return text[: max_len - 3] + "..."


def parse_date(text: str) -> date:
    """argparse type for YYYY-MM-DD dates."""
    try:
        return date.fromisoformat(text)
    except ValueError:
        raise argparse.ArgumentTypeError(
            f"invalid date '{text}' (expected YYYY-MM-DD)"
        )


def get_rules(rules_file: Optional[Path]) -> Sequence[CategoryRule]:
    """Rules from a YAML file, or the built-in defaults."""
    if rules_file is None:
        return DEFAULT_RULES
    return load_rules(rules_file)


# =============================================================================
# Recommend command
# =============================================================================


def make_recommendation_table(recs: List[Recommendation]) -> List[List[str]]:
    """Convert recommendations to table rows."""
    return [
        [
            rec.priority.label,
            rec.component,
            rec.description,
            format_miles(rec.mileage_elapsed),
            format_months(rec.months_elapsed),
        ]
        for rec in recs
    ]


def print_skipped(skipped: List[Skipped]) -> None:
    print(f"SKIPPED ({len(skipped)} rules with invalid configuration):")
    for s in skipped:
        print(f"  {s.rule.component}: {s.reason}")
    print()


def cmd_recommend(args):
    """Show maintenance recommendations for the vehicle."""
    vehicle = load_vehicle(args.vehicle_file)
    rules = get_rules(args.rules)
    now = args.as_of or date.today()
    basis = PriorityBasis(args.basis)

    print(f"Vehicle: {vehicle.name}")
    print(f"Current mileage: {vehicle.current_mileage:,.0f} (as of {now.isoformat()})")
    if basis != PriorityBasis.MILEAGE:
        print(f"Priority basis: {basis.value.upper()}")
    print(f"Rules: {len(rules)}")
    print()

    result = evaluate_rules(vehicle.service_state(now), rules, now, basis)
    recs = result.recommendations
    if args.sort:
        recs = sort_by_priority(recs)

    if recs:
        headers = ["Priority", "Component", "Action", "Since (mi)", "Since (mo)"]
        print(
            tabulate(
                make_recommendation_table(recs), headers=headers, tablefmt="simple"
            )
        )
        print()
    else:
        print("No maintenance recommended.")
        print()

    if result.skipped:
        print_skipped(result.skipped)

    if args.save and recs:
        added = save_recommendations(args.vehicle_file, recs)
        print(f"Saved {added} new recommendation(s).")

    return 0


# =============================================================================
# History command
# =============================================================================


def make_history_table(entries: List[HistoryEntry]) -> List[List[str]]:
    """Convert history entries to table rows."""
    rows = []
    for entry in entries:
        rows.append(
            [
                entry.date,
                format_miles(entry.mileage),
                entry.category,
                entry.performed_by or "-",
                format_cost(entry.cost),
                truncate(entry.notes),
            ]
        )
    return rows


def cmd_history(args):
    """View service history."""
    vehicle = load_vehicle(args.vehicle_file)

    entries = vehicle.get_history_sorted(sort_by=args.sort, reverse=not args.asc)

    if args.category:
        entries = [e for e in entries if args.category.lower() in e.category.lower()]

    if args.since:
        entries = [e for e in entries if e.date >= args.since]

    total_cost = sum(e.cost for e in entries if e.cost is not None)

    print(f"Vehicle: {vehicle.name}")
    print(f"Current mileage: {vehicle.current_mileage:,.0f}")
    print(f"Total services: {len(vehicle.history)}")
    if args.category or args.since:
        print(f"Showing: {len(entries)} (filtered)")
    if total_cost > 0:
        print(f"Total cost: ${total_cost:,.2f}")
    print()

    if not entries:
        print("No history entries found.")
        return 0

    headers = ["Date", "Mileage", "Category", "Performed By", "Cost", "Notes"]
    print(tabulate(make_history_table(entries), headers=headers, tablefmt="simple"))

    return 0


# =============================================================================
# Log command
# =============================================================================


def find_rule(rules: Sequence[CategoryRule], text: str) -> Optional[CategoryRule]:
    """Match a rule by key or component name, case-insensitive."""
    text = text.lower()
    for rule in rules:
        if rule.key.lower() == text or rule.component.lower() == text:
            return rule
    return None


def cmd_log(args):
    """Add a new service entry."""
    rules = get_rules(args.rules)
    rule = find_rule(rules, args.category)

    if rule is None:
        print(f"Error: Unknown category '{args.category}'")
        print("\nAvailable categories:")
        for r in rules:
            print(f"  {r.key} ({r.component})")
        return 1

    entry = HistoryEntry(
        category=rule.key,
        date=(args.date or date.today()).isoformat(),
        mileage=args.mileage,
        performed_by=args.by,
        notes=args.notes,
        cost=args.cost,
    )

    print(f"Adding service entry to {args.vehicle_file}:")
    print(f"  Category: {rule.component}")
    print(f"  Date:     {entry.date}")
    if entry.mileage:
        print(f"  Mileage:  {entry.mileage:,.0f}")
    if entry.performed_by:
        print(f"  By:       {entry.performed_by}")
    if entry.notes:
        print(f"  Notes:    {entry.notes}")
    if entry.cost:
        print(f"  Cost:     ${entry.cost:.2f}")
    print()

    if args.dry_run:
        print("(dry run - no changes made)")
        return 0

    save_history_entry(args.vehicle_file, entry)
    print("Entry saved.")

    return 0


# =============================================================================
# Update Miles command
# =============================================================================


def cmd_update_miles(args):
    """Update current vehicle mileage."""
    vehicle = load_vehicle(args.vehicle_file)
    old_miles = vehicle.current_mileage

    print(f"Vehicle: {vehicle.name}")
    print(f"Current mileage: {old_miles:,.0f}")
    print(f"New mileage:     {args.mileage:,.0f}")
    print()

    if args.mileage < old_miles:
        print("Warning: new mileage is lower than current mileage")

    if args.dry_run:
        print("(dry run - no changes made)")
        return 0

    save_current_mileage(args.vehicle_file, args.mileage)
    print("Mileage updated.")

    return 0


# =============================================================================
# Rules command
# =============================================================================


def cmd_rules(args):
    """List maintenance category rules."""
    rules = get_rules(args.rules)

    print(f"Rules: {len(rules)}")
    print()

    rows = [
        [
            rule.key,
            rule.component,
            f"{rule.mileage_interval:,.0f} mi",
            f"{rule.time_interval_months} mo",
            rule.description,
        ]
        for rule in rules
    ]
    headers = ["Key", "Component", "Interval (mi)", "Interval (time)", "Action"]
    print(tabulate(rows, headers=headers, tablefmt="simple"))

    return 0


# =============================================================================
# Ack command
# =============================================================================


def cmd_ack(args):
    """Acknowledge a saved recommendation."""
    try:
        acknowledge_recommendation(args.vehicle_file, args.index)
    except IndexError as e:
        print(f"Error: {e}")
        return 1
    print(f"Recommendation {args.index} acknowledged.")
    return 0


# =============================================================================
# Main
# =============================================================================


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Vehicle maintenance recommendations",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s vehicles/brz.yaml recommend
  %(prog)s vehicles/brz.yaml recommend --sort --as-of 2025-06-01
  %(prog)s vehicles/brz.yaml recommend --rules rules.yaml --basis worst --save
  %(prog)s vehicles/brz.yaml history --category oil
  %(prog)s vehicles/brz.yaml log oil_change --mileage 58000 --by self
  %(prog)s vehicles/brz.yaml update-miles 58000
  %(prog)s vehicles/brz.yaml ack 0
""",
    )
    parser.add_argument(
        "vehicle_file",
        type=Path,
        help="Path to vehicle YAML file",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable debug logging",
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    rules_help = "Rules YAML file (default: built-in oil/tires/brakes rules)"

    # Recommend subcommand
    recommend_parser = subparsers.add_parser(
        "recommend", help="Show maintenance recommendations"
    )
    recommend_parser.add_argument("--rules", type=Path, help=rules_help)
    recommend_parser.add_argument(
        "--as-of",
        type=parse_date,
        help="Evaluation date in YYYY-MM-DD format (default: today)",
    )
    recommend_parser.add_argument(
        "--basis",
        choices=[b.value for b in PriorityBasis],
        default=PriorityBasis.MILEAGE.value,
        help="Axis that drives priority (default: mileage)",
    )
    recommend_parser.add_argument(
        "--sort",
        action="store_true",
        help="Sort most urgent first instead of rule order",
    )
    recommend_parser.add_argument(
        "--save",
        action="store_true",
        help="Store new recommendations in the vehicle file",
    )

    # History subcommand
    history_parser = subparsers.add_parser("history", help="View service history")
    history_parser.add_argument(
        "--category",
        type=str,
        help="Filter to categories containing text (case-insensitive)",
    )
    history_parser.add_argument(
        "--since",
        type=str,
        help="Show only entries since date (YYYY-MM-DD)",
    )
    history_parser.add_argument(
        "--sort",
        choices=["date", "miles", "category"],
        default="date",
        help="Sort order (default: date)",
    )
    history_parser.add_argument(
        "--asc",
        action="store_true",
        help="Sort ascending instead of descending",
    )

    # Log subcommand
    log_parser = subparsers.add_parser("log", help="Add a new service entry")
    log_parser.add_argument(
        "category",
        type=str,
        help="Category key or component (e.g., 'oil_change', 'Brakes')",
    )
    log_parser.add_argument("--rules", type=Path, help=rules_help)
    log_parser.add_argument(
        "--date",
        type=parse_date,
        help="Service date in YYYY-MM-DD format (default: today)",
    )
    log_parser.add_argument("--mileage", type=float, help="Mileage at time of service")
    log_parser.add_argument(
        "--by",
        type=str,
        help="Who performed the service (e.g., 'self', 'Dealer')",
    )
    log_parser.add_argument("--notes", type=str, help="Notes about the service")
    log_parser.add_argument("--cost", type=float, help="Cost of service")
    log_parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Show what would be added without saving",
    )

    # Update Miles subcommand
    update_miles_parser = subparsers.add_parser(
        "update-miles", help="Update current vehicle mileage"
    )
    update_miles_parser.add_argument("mileage", type=float, help="Current mileage")
    update_miles_parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Show what would be updated without saving",
    )

    # Rules subcommand
    rules_parser = subparsers.add_parser("rules", help="List maintenance rules")
    rules_parser.add_argument("--rules", type=Path, help=rules_help)

    # Ack subcommand
    ack_parser = subparsers.add_parser("ack", help="Acknowledge a saved recommendation")
    ack_parser.add_argument("index", type=int, help="Index of saved recommendation")

    return parser


COMMANDS = {
    "recommend": cmd_recommend,
    "history": cmd_history,
    "log": cmd_log,
    "update-miles": cmd_update_miles,
    "rules": cmd_rules,
    "ack": cmd_ack,
}


def main(argv: Optional[List[str]] = None):
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    # Validate vehicle file exists
    if not args.vehicle_file.exists():
        print(f"Error: File not found: {args.vehicle_file}")
        return 1

    try:
        return COMMANDS[args.command](args)
    except ConfigurationError as e:
        print(f"Error: {e}")
        return 1


if __name__ == "__main__":
    sys.exit(main() or 0)
