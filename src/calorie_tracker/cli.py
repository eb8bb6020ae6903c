"""
Command-line interface for the calorie tracker.

Usage:
    calorie-tracker [--date YYYY-MM-DD] <command> ...

    calorie-tracker show
    calorie-tracker add <meal> <name> <calories>
    calorie-tracker remove <meal> <entry-id>
    calorie-tracker reset
    calorie-tracker limit <calories>
    calorie-tracker week
    calorie-tracker month
    calorie-tracker suggest <ingredient text> [--meal <meal>]
"""

import argparse
import asyncio
import sys
from collections.abc import Awaitable, Callable
from dataclasses import dataclass, field

from calorie_tracker.app_logging import configure_logging
from calorie_tracker.config import Settings
from calorie_tracker.containers import build_suggestion_api_client, build_tracker_store
from calorie_tracker.domain.dates import WEEKDAY_HEADERS, date_from_iso
from calorie_tracker.domain.tracker import MEAL_KEYS, MEALS
from calorie_tracker.services.calendar import month_view, week_view
from calorie_tracker.services.entry_form import (
    EntryForm,
    SuggestionApiClient,
    request_suggestion,
)
from calorie_tracker.services.tracker import TrackerStore


async def _close_nothing() -> None:
    return None


@dataclass
class CliContext:
    """Dependencies shared by CLI commands."""

    store: TrackerStore
    suggestion_client: SuggestionApiClient | None = None
    suggestion_timeout_seconds: float = 20.0
    close_resources: Callable[[], Awaitable[None]] = field(default=_close_nothing)


def cmd_show(args: argparse.Namespace, context: CliContext) -> int:
    """Print the selected day's entries and totals."""
    store = context.store
    day = store.day_entries()
    selected = date_from_iso(store.selected_date)

    print(f"{selected:%A, %B} {selected.day}, {selected.year}")
    print(f"Daily limit: {store.state.limit} kcal")
    print(f"Used: {store.total_used()} kcal")
    print(f"Remaining: {store.remaining()} kcal")
    for key, label in MEALS:
        entries = day.meal(key)
        print()
        print(f"{label} ({len(entries)})")
        if not entries:
            print("  (no items)")
        for entry in entries:
            print(f"  - {entry.name}: {entry.calories} kcal [{entry.id}]")
    return 0


def cmd_add(args: argparse.Namespace, context: CliContext) -> int:
    """Add an item to a meal."""
    form = EntryForm(name=args.name, calories=args.calories)
    form.select_meal(args.meal)
    entry = form.submit(context.store)
    if entry is None:
        return 1
    print(f"Added {entry.name} ({entry.calories} kcal) to {args.meal}.")
    return 0


def cmd_remove(args: argparse.Namespace, context: CliContext) -> int:
    """Remove an item by id."""
    if not context.store.remove_item(args.meal, args.entry_id):
        print(f"No item {args.entry_id} in {args.meal}.")
        return 1
    print(f"Removed {args.entry_id} from {args.meal}.")
    return 0


def cmd_reset(args: argparse.Namespace, context: CliContext) -> int:
    """Clear the selected day."""
    context.store.reset_day()
    print(f"Reset {context.store.selected_date}.")
    return 0


def cmd_limit(args: argparse.Namespace, context: CliContext) -> int:
    """Set the daily calorie limit."""
    context.store.set_limit(args.value)
    print(f"Daily limit: {context.store.state.limit} kcal")
    return 0


def cmd_week(args: argparse.Namespace, context: CliContext) -> int:
    """Print this week's statuses."""
    store = context.store
    for day, status in week_view(store.state, store.clock()):
        print(f"{day.day_label} {day.day_number:>2}  {status.label}")
    return 0


def cmd_month(args: argparse.Namespace, context: CliContext) -> int:
    """Print this month's statuses."""
    store = context.store
    today = store.clock()
    print(f"{today:%B} {today.year}")
    for index, cell in enumerate(month_view(store.state, today)):
        if cell is None:
            continue
        day, status = cell
        weekday = WEEKDAY_HEADERS[index % len(WEEKDAY_HEADERS)]
        print(f"{weekday} {day.day_number:>2}  {status.label}")
    return 0


def cmd_suggest(args: argparse.Namespace, context: CliContext) -> int:
    """Ask the AI for a calorie estimate, optionally adding the item."""
    form = EntryForm(name=" ".join(args.text))
    if args.meal:
        form.select_meal(args.meal)
    client = context.suggestion_client
    if client is None:
        print("Error: No suggestion endpoint configured.")
        return 1
    asyncio.run(_run_suggestion(form, client, context))

    if not form.name.strip():
        print("Error: Ingredient text is empty.")
        return 1

    if form.ai_error:
        print(f"Error: {form.ai_error}")
        return 1
    print(f"Suggested: {form.calories} kcal")
    if form.ai_note:
        print(f"Note: {form.ai_note}")
    if args.meal:
        entry = form.submit(context.store)
        if entry is None:
            print("Nothing added: the suggestion had no calories.")
            return 1
        print(f"Added {entry.name} ({entry.calories} kcal) to {args.meal}.")
    return 0


async def _run_suggestion(
    form: EntryForm, client: SuggestionApiClient, context: CliContext
) -> None:
    try:
        await request_suggestion(
            form,
            client,
            timeout_seconds=context.suggestion_timeout_seconds,
        )
    finally:
        await context.close_resources()


COMMANDS: dict[str, Callable[[argparse.Namespace, CliContext], int]] = {
    "show": cmd_show,
    "add": cmd_add,
    "remove": cmd_remove,
    "reset": cmd_reset,
    "limit": cmd_limit,
    "week": cmd_week,
    "month": cmd_month,
    "suggest": cmd_suggest,
}


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Track daily calories against a limit",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "--date",
        help="Date to work on as YYYY-MM-DD (default: today)",
    )

    subparsers = parser.add_subparsers(dest="command", help="Commands")

    subparsers.add_parser("show", help="Show entries and totals")

    add_parser = subparsers.add_parser("add", help="Add an item to a meal")
    add_parser.add_argument("meal", choices=MEAL_KEYS)
    add_parser.add_argument("name", help="Food name")
    add_parser.add_argument("calories", help="Calories (kcal)")

    remove_parser = subparsers.add_parser("remove", help="Remove an item")
    remove_parser.add_argument("meal", choices=MEAL_KEYS)
    remove_parser.add_argument("entry_id", help="Entry id shown by 'show'")

    subparsers.add_parser("reset", help="Clear all meals of the day")

    limit_parser = subparsers.add_parser("limit", help="Set the daily limit")
    limit_parser.add_argument("value", help="Daily calorie limit")

    subparsers.add_parser("week", help="Show this week's statuses")
    subparsers.add_parser("month", help="Show this month's statuses")

    suggest_parser = subparsers.add_parser(
        "suggest", help="Estimate calories for an ingredient with AI"
    )
    suggest_parser.add_argument("text", nargs="+", help="Ingredient line")
    suggest_parser.add_argument(
        "--meal",
        choices=MEAL_KEYS,
        help="Add the suggested item to this meal",
    )
    return parser


def run(args: argparse.Namespace, context: CliContext) -> int:
    """Dispatch a parsed command."""
    if args.date:
        try:
            context.store.select_date(args.date)
        except ValueError as exc:
            print(f"Error: {exc}")
            return 1
    return COMMANDS[args.command](args, context)


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return 1

    configure_logging()
    settings = Settings()
    try:
        store = build_tracker_store(settings)
    except ValueError as exc:
        print(f"Error: {exc}")
        return 1
    context = CliContext(
        store=store,
        suggestion_timeout_seconds=settings.suggestion_timeout_seconds,
    )
    if args.command == "suggest":
        suggestion_client = build_suggestion_api_client(settings)
        context.suggestion_client = suggestion_client
        context.close_resources = suggestion_client.close
    return run(args, context)


if __name__ == "__main__":
    sys.exit(main())
