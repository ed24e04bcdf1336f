#!/usr/bin/env python3
"""
Unified CLI for the vehicle fuel and cost logbook.

Commands:
  summary      - Dashboard totals and estimated range
  analysis     - Tank, trip-type and gauge-segment analysis
  stations     - Gas stations ranked by cost per km
  range        - Estimated remaining range
  fuel         - List fuel entries (also: reports, expenses, tasks)
  log-fuel     - Record a fill-up (also: log-report, log-expense, add-task)
  toggle-task  - Mark a maintenance task done / not done
  delete       - Delete a record by id
  set-vehicle  - Create or replace the vehicle profile
  export       - Write the logbook to a JSON or YAML file
  import       - Replace the logbook with a JSON or YAML file
"""

import argparse
import logging
import sys
from datetime import date, datetime
from pathlib import Path
from tabulate import tabulate
from typing import List, Optional

from carlog import (
    CarlogError,
    Expense,
    FuelEntry,
    MaintenanceTask,
    RangeEstimate,
    RecordStore,
    StationStats,
    TripReport,
    Vehicle,
    analyze,
    estimate_range,
    load_store,
    new_id,
    rank_stations,
    save_store,
    sort_by_date_desc,
    station_stats,
    summarize,
)
from carlog.config import Config
from carlog.expense_category import ExpenseCategory
from carlog.loader import import_document, read_document
from carlog.trip_type import TripType

logger = logging.getLogger("track")

# =============================================================================
# Formatting helpers
# =============================================================================


def format_km(km: Optional[float]) -> str:
    """Format a distance or odometer reading for display."""
    return f"{km:,.0f}" if km is not None else "-"


def format_cost(cost: Optional[float], places: int = 2) -> str:
    """Format money for display."""
    return f"${cost:,.{places}f}" if cost is not None else "-"


def format_kmpl(kmpl: Optional[float]) -> str:
    return f"{kmpl:.2f}" if kmpl is not None else "-"


def format_percent(percent: Optional[float]) -> str:
    return f"{percent:.0f}%" if percent is not None else "-"


def truncate(text: Optional[str], max_len: int = 30) -> str:
    """Truncate text with ellipsis if too long."""
    if text is None:
        return "-"
    if len(text) <= max_len:
        return text
    return text[: max_len - 3] + "..."


def format_range(estimate: RangeEstimate) -> str:
    """One-line range, or the reason it is missing."""
    if not estimate.has_data:
        return estimate.message or "Insufficient data."
    return (
        f"{estimate.avg:,.0f} km "
        f"(safe: {estimate.pessimistic:,.0f} - {estimate.optimistic:,.0f} km)"
    )


def print_vehicle_header(store: RecordStore) -> None:
    vehicle = store.vehicle
    if vehicle is None:
        print("Vehicle: (not set - use set-vehicle)")
        return
    print(f"Vehicle: {vehicle.name}")
    print(f"Current mileage: {format_km(vehicle.mileage)} km")


# =============================================================================
# Summary / analysis commands
# =============================================================================


def cmd_summary(args, store: RecordStore):
    """Dashboard totals and estimated range."""
    summary = summarize(store.snapshot())

    print_vehicle_header(store)
    print(f"Total spending: {format_cost(summary.total_spending)}")
    print(f"Average economy: {summary.average_km_per_liter:.2f} km/l")
    print(f"Estimated range: {format_range(summary.estimated_range)}")
    print(f"Pending tasks: {summary.pending_tasks}")
    print()

    if summary.economy_series:
        print("FUEL ECONOMY:")
        rows = [[p.date.isoformat(), format_kmpl(p.km_per_liter)] for p in summary.economy_series]
        print(tabulate(rows, headers=["Date", "km/l"], tablefmt="simple"))
        print()

    if summary.spending_by_category:
        print("SPENDING BY CATEGORY:")
        rows = [
            [category.value, format_cost(total)]
            for category, total in summary.spending_by_category.items()
        ]
        print(tabulate(rows, headers=["Category", "Total"], tablefmt="simple"))
        print()

    return 0


def make_station_table(stats: List[StationStats]) -> List[List[str]]:
    """Convert station stats to table rows."""
    return [
        [
            s.station,
            str(s.visits),
            format_cost(s.avg_price_per_liter),
            format_kmpl(s.avg_kmpl),
            format_cost(s.avg_cost_per_km, places=3),
        ]
        for s in stats
    ]


STATION_HEADERS = ["Station", "Visits", "Avg price/L", "Avg km/l", "Avg cost/km"]


def cmd_analysis(args, store: RecordStore):
    """Tank, trip-type, segment and station analysis."""
    snapshot = store.snapshot()
    if len(snapshot.fuel_entries) < 2 and len(snapshot.trip_reports) < 2:
        print("Record more fuel entries and trip reports to see the analysis.")
        return 0

    analysis = analyze(snapshot)

    if analysis.tank is not None:
        tank = analysis.tank
        print("TANK:")
        if tank.effective_capacity is not None:
            print(
                f"  Capacity: {tank.effective_capacity:.1f} L "
                f"({tank.capacity_source.value})"
            )
            print(f"  Liters per segment (1/12): ~{tank.liters_per_segment:.2f} L")
        print(f"  Average refill point: {tank.average_start_percentage:.1f}%")
        print(f"  Based on {tank.sample_size} entries")
        print()

    print("EFFICIENCY BY TRIP TYPE:")
    rows = [[t.trip_type.value, format_kmpl(t.km_per_liter)] for t in analysis.trip_types]
    print(tabulate(rows, headers=["Trip type", "km/l"], tablefmt="simple"))
    if not analysis.has_efficiency_data:
        print("(not enough data yet: needs trip reports and a tank capacity)")
    print()

    if analysis.segments:
        print("AVERAGE KM PER GAUGE SEGMENT:")
        rows = [[s.label, f"{s.average_km:.1f}"] for s in analysis.segments]
        print(tabulate(rows, headers=["Segment", "km"], tablefmt="simple"))
        print()

    if analysis.stations:
        print("STATIONS (cheapest per km first):")
        print(
            tabulate(
                make_station_table(analysis.stations),
                headers=STATION_HEADERS,
                tablefmt="simple",
            )
        )
        print()

    return 0


def cmd_stations(args, store: RecordStore):
    """Gas stations ranked by average cost per km."""
    stats = rank_stations(station_stats(store.snapshot().fuel_entries))
    if not stats:
        print("No station data yet (needs at least two fuel entries).")
        return 0
    print(tabulate(make_station_table(stats), headers=STATION_HEADERS, tablefmt="simple"))
    return 0


def cmd_range(args, store: RecordStore):
    """Estimated remaining range."""
    snapshot = store.snapshot()
    estimate = estimate_range(
        snapshot.fuel_entries, snapshot.trip_reports, snapshot.vehicle
    )
    print_vehicle_header(store)
    if not estimate.has_data:
        print(f"Range: {estimate.message}")
        return 0
    print(f"Average:     {format_km(estimate.avg)} km")
    print(f"Pessimistic: {format_km(estimate.pessimistic)} km")
    print(f"Optimistic:  {format_km(estimate.optimistic)} km")
    return 0


# =============================================================================
# Listing commands
# =============================================================================


def make_fuel_table(entries: List[FuelEntry]) -> List[List[str]]:
    """Convert fuel entries to table rows."""
    return [
        [
            e.id,
            e.date.isoformat(),
            format_km(e.odometer),
            f"{e.liters:.2f}",
            format_cost(e.price_per_liter),
            format_cost(e.total_cost),
            truncate(e.gas_station, 20),
            format_percent(e.start_tank_percentage),
            format_percent(e.end_tank_percentage),
        ]
        for e in entries
    ]


def make_report_table(reports: List[TripReport]) -> List[List[str]]:
    return [
        [
            r.id,
            r.date.strftime("%Y-%m-%d %H:%M"),
            format_km(r.odometer),
            format_km(r.remaining_km),
            f"{r.fuel_gauge_level}/12",
            r.trip_type.value,
            truncate(r.notes),
        ]
        for r in reports
    ]


def make_expense_table(expenses: List[Expense]) -> List[List[str]]:
    return [
        [
            e.id,
            e.date.isoformat(),
            e.category.value,
            truncate(e.description),
            format_cost(e.cost),
            e.location or "-",
        ]
        for e in expenses
    ]


def make_task_table(tasks: List[MaintenanceTask]) -> List[List[str]]:
    return [
        [
            t.id,
            t.date.isoformat(),
            truncate(t.description),
            format_km(t.odometer),
            format_cost(t.cost),
            "done" if t.is_completed else "pending",
        ]
        for t in tasks
    ]


def cmd_list(args, store: RecordStore):
    """List one record collection, newest first."""
    snapshot = store.snapshot()
    if args.command == "fuel":
        rows = make_fuel_table(sort_by_date_desc(snapshot.fuel_entries))
        headers = ["Id", "Date", "Odometer", "Liters", "Price/L", "Total", "Station", "Start", "End"]
    elif args.command == "reports":
        rows = make_report_table(sort_by_date_desc(snapshot.trip_reports))
        headers = ["Id", "Date", "Odometer", "Remaining", "Gauge", "Type", "Notes"]
    elif args.command == "expenses":
        rows = make_expense_table(sort_by_date_desc(snapshot.expenses))
        headers = ["Id", "Date", "Category", "Description", "Cost", "Location"]
    else:
        rows = make_task_table(sort_by_date_desc(snapshot.maintenance_tasks))
        headers = ["Id", "Date", "Description", "Odometer", "Cost", "Status"]

    if not rows:
        print("No entries found.")
        return 0
    print(tabulate(rows, headers=headers, tablefmt="simple"))
    return 0


# =============================================================================
# Logging commands
# =============================================================================


def _save(args, store: RecordStore, what: str):
    if args.dry_run:
        print("(dry run - no changes made)")
        return 0
    save_store(args.data, store)
    print(f"{what} saved.")
    return 0


def cmd_log_fuel(args, store: RecordStore):
    """Record a fill-up."""
    entry = FuelEntry.create(
        id=new_id(),
        date=args.date or date.today().isoformat(),
        odometer=args.odometer,
        price_per_liter=args.price,
        total_cost=args.total,
        gas_station=args.station,
        start_tank_percentage=args.start_pct,
        end_tank_percentage=args.end_pct,
        remaining_km=args.remaining_km,
        range_after_fill=args.range_after,
        notes=args.notes,
    )
    store.add_fuel_entry(entry)

    print(f"Adding fuel entry to {args.data}:")
    print(f"  Date:     {entry.date.isoformat()}")
    print(f"  Odometer: {format_km(entry.odometer)} km")
    print(f"  Liters:   {entry.liters:.2f}")
    print(f"  Station:  {entry.gas_station}")
    print()
    return _save(args, store, "Entry")


def cmd_log_report(args, store: RecordStore):
    """Record a trip report."""
    report = TripReport(
        id=new_id(),
        date=args.date or datetime.now().replace(second=0, microsecond=0),
        odometer=args.odometer,
        remaining_km=args.remaining_km,
        fuel_gauge_level=args.gauge,
        trip_type=args.trip_type,
        notes=args.notes,
    )
    store.add_trip_report(report)

    print(f"Adding trip report to {args.data}:")
    print(f"  Date:     {report.date.strftime('%Y-%m-%d %H:%M')}")
    print(f"  Odometer: {format_km(report.odometer)} km")
    print(f"  Gauge:    {report.fuel_gauge_level}/12")
    print(f"  Type:     {report.trip_type.value}")
    print()
    return _save(args, store, "Report")


def cmd_log_expense(args, store: RecordStore):
    """Record an expense."""
    expense = Expense(
        id=new_id(),
        date=args.date or date.today().isoformat(),
        category=args.category,
        description=args.description,
        cost=args.cost,
        location=args.location,
    )
    store.add_expense(expense)

    print(f"Adding expense to {args.data}:")
    print(f"  {expense.category.value}: {expense.description} {format_cost(expense.cost)}")
    print()
    return _save(args, store, "Expense")


def cmd_add_task(args, store: RecordStore):
    """Record a maintenance task."""
    task = MaintenanceTask(
        id=new_id(),
        date=args.date or date.today().isoformat(),
        description=args.description,
        cost=args.cost,
        odometer=args.odometer,
        is_completed=args.done,
        location=args.location,
    )
    store.add_maintenance_task(task)

    print(f"Adding maintenance task to {args.data}:")
    print(f"  {task.description} @ {format_km(task.odometer)} km {format_cost(task.cost)}")
    print()
    return _save(args, store, "Task")


def cmd_toggle_task(args, store: RecordStore):
    task = store.toggle_maintenance_task(args.id)
    print(f"Task '{task.description}' is now {'done' if task.is_completed else 'pending'}.")
    save_store(args.data, store)
    return 0


DELETERS = {
    "fuel": RecordStore.delete_fuel_entry,
    "report": RecordStore.delete_trip_report,
    "expense": RecordStore.delete_expense,
    "task": RecordStore.delete_maintenance_task,
}


def cmd_delete(args, store: RecordStore):
    """Delete a record permanently."""
    DELETERS[args.kind](store, args.id)
    save_store(args.data, store)
    print(f"Deleted {args.kind} {args.id}.")
    return 0


def cmd_set_vehicle(args, store: RecordStore):
    """Create or replace the vehicle profile."""
    vehicle = Vehicle(
        make=args.make,
        model=args.model,
        year=args.year,
        mileage=args.mileage,
        vin=args.vin,
        tank_capacity=args.tank_capacity,
    )
    store.set_vehicle(vehicle)
    save_store(args.data, store)
    print(f"Vehicle set: {vehicle.name}")
    return 0


# =============================================================================
# Export / import
# =============================================================================


def cmd_export(args, store: RecordStore):
    save_store(args.path, store)
    print(f"Exported logbook to {args.path}")
    return 0


def cmd_import(args, store: RecordStore):
    """Replace the whole logbook with a file's contents."""
    if not args.path.exists():
        print(f"Error: File not found: {args.path}")
        return 1
    snapshot = import_document(store, read_document(args.path))
    save_store(args.data, store)
    print(
        f"Imported {len(snapshot.fuel_entries)} fuel entries, "
        f"{len(snapshot.trip_reports)} trip reports, "
        f"{len(snapshot.maintenance_tasks)} tasks and "
        f"{len(snapshot.expenses)} expenses."
    )
    return 0


# =============================================================================
# Main
# =============================================================================


COMMANDS = {
    "summary": cmd_summary,
    "analysis": cmd_analysis,
    "stations": cmd_stations,
    "range": cmd_range,
    "fuel": cmd_list,
    "reports": cmd_list,
    "expenses": cmd_list,
    "tasks": cmd_list,
    "log-fuel": cmd_log_fuel,
    "log-report": cmd_log_report,
    "log-expense": cmd_log_expense,
    "add-task": cmd_add_task,
    "toggle-task": cmd_toggle_task,
    "delete": cmd_delete,
    "set-vehicle": cmd_set_vehicle,
    "export": cmd_export,
    "import": cmd_import,
}


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Vehicle fuel and cost logbook",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s set-vehicle Mazda 3 2019 --mileage 42000 --tank-capacity 51
  %(prog)s log-fuel 42500 22.9 950 "Shell Centro" --start-pct 20 --end-pct 100
  %(prog)s log-report 42650 8 --remaining-km 390 --type highway
  %(prog)s summary
  %(prog)s analysis
  %(prog)s --data backup.yaml stations
  %(prog)s import backup.json
""",
    )
    parser.add_argument(
        "--data",
        type=Path,
        default=Path(Config.DATA_FILE),
        help=f"Path to the logbook file (default: {Config.DATA_FILE})",
    )
    parser.add_argument("--verbose", "-v", action="store_true", help="Debug logging")

    subparsers = parser.add_subparsers(dest="command", required=True)

    subparsers.add_parser("summary", help="Dashboard totals and estimated range")
    subparsers.add_parser("analysis", help="Tank, trip-type and segment analysis")
    subparsers.add_parser("stations", help="Gas stations ranked by cost per km")
    subparsers.add_parser("range", help="Estimated remaining range")
    subparsers.add_parser("fuel", help="List fuel entries")
    subparsers.add_parser("reports", help="List trip reports")
    subparsers.add_parser("expenses", help="List expenses")
    subparsers.add_parser("tasks", help="List maintenance tasks")

    # log-fuel
    fuel_parser = subparsers.add_parser("log-fuel", help="Record a fill-up")
    fuel_parser.add_argument("odometer", type=float, help="Odometer (km)")
    fuel_parser.add_argument("price", type=float, help="Price per liter")
    fuel_parser.add_argument("total", type=float, help="Total cost")
    fuel_parser.add_argument("station", type=str, help="Gas station name")
    fuel_parser.add_argument("--date", type=str, help="YYYY-MM-DD (default: today)")
    fuel_parser.add_argument("--start-pct", type=float, help="Tank %% before filling")
    fuel_parser.add_argument("--end-pct", type=float, help="Tank %% after filling")
    fuel_parser.add_argument("--remaining-km", type=float, help="Trip computer range before filling")
    fuel_parser.add_argument("--range-after", type=float, help="Trip computer range after filling")
    fuel_parser.add_argument("--notes", type=str, help="Notes")
    fuel_parser.add_argument("--dry-run", action="store_true", help="Show without saving")

    # log-report
    report_parser = subparsers.add_parser("log-report", help="Record a trip report")
    report_parser.add_argument("odometer", type=float, help="Odometer (km)")
    report_parser.add_argument("gauge", type=int, help="Fuel gauge level (1-12)")
    report_parser.add_argument(
        "--remaining-km", type=float, required=True, help="Trip computer range"
    )
    report_parser.add_argument(
        "--type",
        dest="trip_type",
        default=TripType.WORK.value,
        help="Trip type: work, highway or other (default: work)",
    )
    report_parser.add_argument("--date", type=str, help="YYYY-MM-DDTHH:MM (default: now)")
    report_parser.add_argument("--notes", type=str, help="Notes")
    report_parser.add_argument("--dry-run", action="store_true", help="Show without saving")

    # log-expense
    expense_parser = subparsers.add_parser("log-expense", help="Record an expense")
    expense_parser.add_argument(
        "category",
        type=str,
        help="Category: " + ", ".join(c.name.lower() for c in ExpenseCategory),
    )
    expense_parser.add_argument("description", type=str, help="Description")
    expense_parser.add_argument("cost", type=float, help="Cost")
    expense_parser.add_argument("--date", type=str, help="YYYY-MM-DD (default: today)")
    expense_parser.add_argument("--location", type=str, help="Where")
    expense_parser.add_argument("--dry-run", action="store_true", help="Show without saving")

    # add-task
    task_parser = subparsers.add_parser("add-task", help="Record a maintenance task")
    task_parser.add_argument("description", type=str, help="Description")
    task_parser.add_argument("cost", type=float, help="Cost")
    task_parser.add_argument("odometer", type=float, help="Odometer (km)")
    task_parser.add_argument("--date", type=str, help="YYYY-MM-DD (default: today)")
    task_parser.add_argument("--location", type=str, help="Where")
    task_parser.add_argument("--done", action="store_true", help="Already completed")
    task_parser.add_argument("--dry-run", action="store_true", help="Show without saving")

    # toggle-task
    toggle_parser = subparsers.add_parser("toggle-task", help="Flip task completion")
    toggle_parser.add_argument("id", type=str, help="Task id")

    # delete
    delete_parser = subparsers.add_parser("delete", help="Delete a record")
    delete_parser.add_argument("kind", choices=sorted(DELETERS), help="Record kind")
    delete_parser.add_argument("id", type=str, help="Record id")

    # set-vehicle
    vehicle_parser = subparsers.add_parser("set-vehicle", help="Set the vehicle profile")
    vehicle_parser.add_argument("make", type=str)
    vehicle_parser.add_argument("model", type=str)
    vehicle_parser.add_argument("year", type=int)
    vehicle_parser.add_argument("--mileage", type=float, default=0, help="Odometer (km)")
    vehicle_parser.add_argument("--vin", type=str)
    vehicle_parser.add_argument("--tank-capacity", type=float, help="Tank capacity (L)")

    # export / import
    export_parser = subparsers.add_parser("export", help="Write the logbook to a file")
    export_parser.add_argument("path", type=Path, help="Output .json or .yaml file")
    import_parser = subparsers.add_parser("import", help="Replace the logbook from a file")
    import_parser.add_argument("path", type=Path, help="Input .json or .yaml file")

    return parser


def main(argv: Optional[List[str]] = None):
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else Config.LOG_LEVEL,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        store = load_store(args.data)
        logger.debug("Loaded logbook from %s", args.data)
        return COMMANDS[args.command](args, store)
    except (CarlogError, OSError) as e:
        print(f"Error: {e}")
        return 1


if __name__ == "__main__":
    sys.exit(main() or 0)
