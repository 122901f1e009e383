#!/usr/bin/env python3
"""
Day Timeline CLI - set up a day, place habits, inspect the timeline.
"""

import sys
from datetime import date

from timeline import db as db_module
from timeline import engine
from timeline.config import get_config
from timeline.engine import Habit, Profile
from timeline.engine.models import PROFILE_KEYS
from timeline.errors import TimelineError
from timeline.observability import RequestContext, configure_logging, generate_request_id
from timeline.profile_store import get_store

_MINUTE_FIELDS = ("commuteMinutes", "morningRoutineMinutes", "miscMinutes")


def print_header(text: str):
    """Print a section header."""
    print(f"\n{'═' * 50}")
    print(f"  {text}")
    print(f"{'═' * 50}")


def print_table(headers: list, rows: list, widths: list = None):
    """Print a simple table."""
    if not widths:
        widths = [
            max(len(str(row[i])) for row in [headers] + rows)
            for i in range(len(headers))
        ]

    header_str = " │ ".join(str(h).ljust(w) for h, w in zip(headers, widths))
    print(header_str)
    print("─" * len(header_str))

    for row in rows:
        print(" │ ".join(str(c)[:w].ljust(w) for c, w in zip(row, widths)))


def _load_or_exit(user_id: str) -> Profile | None:
    profile = get_store().load(user_id)
    if profile is None:
        print(f"No timeline profile for {user_id}. Run 'setup {user_id}' first.")
    return profile


def cmd_init(args):
    """Create the database."""
    result = db_module.ensure_schema()
    print(f"Database: {db_module.get_db_path()}")
    print(f"Schema version: {result['schema_version']}")
    for table in result["tables_created"]:
        print(f"  ✓ created {table}")


def cmd_setup(args):
    """Create or edit a profile: setup <user> [field=value ...]."""
    if not args:
        print("Usage: setup <user> [sleepStart=HH:MM] [commuteMinutes=N] ...")
        return

    user_id, overrides = args[0], args[1:]
    store = get_store()

    doc = store.load_document(user_id) or dict(get_config().default_profile)
    for item in overrides:
        key, sep, value = item.partition("=")
        if not sep:
            print(f"Ignoring '{item}' (expected field=value)")
            continue
        if key not in PROFILE_KEYS:
            print(f"Ignoring unknown field '{key}' (fields: {', '.join(PROFILE_KEYS)})")
            continue
        doc[key] = int(value) if key in _MINUTE_FIELDS and value.lstrip("-").isdigit() else value

    profile = Profile.from_document(doc)
    free = engine.free_minutes(profile)
    store.save(user_id, profile)

    print_header(f"PROFILE: {user_id}")
    for key, value in profile.to_document().items():
        if key != "scheduledHabits":
            print(f"  {key:<24} {value}")
    print(f"\n  Available free time: {engine.format_duration(free)}")


def cmd_show(args):
    """Show the timeline: show <user> [YYYY-MM-DD]."""
    if not args:
        print("Usage: show <user> [YYYY-MM-DD]")
        return

    profile = _load_or_exit(args[0])
    if profile is None:
        return

    try:
        day = date.fromisoformat(args[1]) if len(args) > 1 else date.today()
    except ValueError:
        print(f"Invalid day '{args[1]}' (use YYYY-MM-DD)")
        return
    timeline = engine.assemble(profile, day)

    print_header(f"TIMELINE {day.isoformat()}")
    rows = []
    for block in timeline.blocks:
        d = block.to_dict()
        rows.append(
            [
                d["startTime"],
                d["endTime"],
                block.type,
                block.label,
                f"{block.duration_min}m",
                block.placement_id or "",
            ]
        )
    print_table(["Start", "End", "Type", "Label", "Dur", "Placement"], rows)
    print(f"\nFree time: {engine.format_duration(timeline.free_minutes)}")


def cmd_free(args):
    """Show free time breakdown: free <user>."""
    if not args:
        print("Usage: free <user>")
        return

    profile = _load_or_exit(args[0])
    if profile is None:
        return

    print_header("FREE TIME")
    rows = [[name, minutes] for name, minutes in engine.breakdown(profile).items()]
    print_table(["Category", "Minutes"], rows)
    print(f"\nOccupied: {engine.occupied_minutes(profile)} min")
    print(f"Free:     {engine.format_duration(engine.free_minutes(profile))}")


def cmd_place(args):
    """Place a habit: place <user> <habit_id> <HH:MM> [name] [time required...]."""
    if len(args) < 3:
        print("Usage: place <user> <habit_id> <HH:MM> [name] [time required]")
        return

    user_id, habit_id, start_time = args[0], args[1], args[2]
    profile = _load_or_exit(user_id)
    if profile is None:
        return

    habit = Habit(
        id=habit_id,
        text=args[3] if len(args) > 3 else habit_id,
        time_required=" ".join(args[4:]) or None,
    )
    updated = engine.place(
        profile, habit, start_time, default_minutes=get_config().default_habit_minutes
    )
    get_store().save(user_id, updated)

    placement = updated.scheduled_habits[-1]
    print(
        f"✓ Placed '{placement.habit_name}' at {start_time} "
        f"for {placement.duration} min ({placement.placement_id})"
    )


def cmd_remove(args):
    """Remove a placement: remove <user> <placement_id>."""
    if len(args) < 2:
        print("Usage: remove <user> <placement_id>")
        return

    user_id, placement_id = args[0], args[1]
    profile = _load_or_exit(user_id)
    if profile is None:
        return

    get_store().save(user_id, engine.remove(profile, placement_id))
    print(f"✓ Removed {placement_id}")


def cmd_slots(args):
    """Print the drop-target grid."""
    slots = engine.day_slots(get_config().slot_minutes)
    for i in range(0, len(slots), 8):
        print("  " + "  ".join(slots[i : i + 8]))


def cmd_help(args):
    """Show help."""
    print("""
DAY TIMELINE CLI

COMMANDS:
  init                         Create the database
  setup <user> [k=v ...]       Create or edit a profile (sleepStart=22:00 ...)
  show <user> [YYYY-MM-DD]     Show the day's blocks
  free <user>                  Show free time breakdown
  place <user> <id> <HH:MM> [name] [time]
                               Place a habit (e.g. ... run 07:00 Run 30 min)
  remove <user> <placement>    Remove a placed habit
  slots                        Show the placement grid
  help                         Show this help
""")


COMMANDS = {
    "init": cmd_init,
    "setup": cmd_setup,
    "show": cmd_show,
    "s": cmd_show,
    "free": cmd_free,
    "f": cmd_free,
    "place": cmd_place,
    "p": cmd_place,
    "remove": cmd_remove,
    "rm": cmd_remove,
    "slots": cmd_slots,
    "help": cmd_help,
    "h": cmd_help,
}


def main(argv: list[str] | None = None) -> int:
    """Main entry point."""
    argv = sys.argv[1:] if argv is None else argv
    configure_logging(level="WARNING")

    if not argv:
        cmd_help([])
        return 0

    cmd, args = argv[0], argv[1:]

    if cmd not in COMMANDS:
        print(f"Unknown command: {cmd}")
        print("Run 'help' for available commands.")
        return 1

    with RequestContext(generate_request_id("cli")):
        try:
            COMMANDS[cmd](args)
        except TimelineError as e:
            print(f"✗ {e}")
            return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
