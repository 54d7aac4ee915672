"""Console front end: render profile, records, and recommendations from the API."""

from __future__ import annotations

import argparse
import sys
from datetime import datetime
from typing import Any, Callable, Sequence

import httpx
from pydantic import TypeAdapter

from app.client.api_client import ApiError, LifeAgentClient, friendly_error
from app.core.logging import configure_logging
from app.utils.datetime import format_relative_time
from app.utils.text import format_match_score, parse_tags

PREFERENCE_FIELDS = ("food", "travel", "exercise", "allergies", "dislikes")
ROUTINE_FIELDS = {
    "wake_up_time": "wakeUpTime",
    "sleep_time": "sleepTime",
    "work_schedule": "workSchedule",
    "exercise_time": "exerciseTime",
}
_TIMESTAMP = TypeAdapter(datetime)
TYPE_ICONS = {"food": "🍽", "travel": "✈", "exercise": "🏃", "other": "📝"}


def _print_profile(profile: dict[str, Any]) -> None:
    print(f"{profile['name']} ({profile.get('location') or 'location not set'})")
    preferences = profile.get("preferences") or {}
    for field in PREFERENCE_FIELDS:
        values = preferences.get(field) or []
        print(f"  {field:<10} {', '.join(values) if values else '-'}")
    routines = profile.get("routines") or {}
    for field, key in ROUTINE_FIELDS.items():
        print(f"  {field.replace('_', ' '):<14} {routines.get(key) or '-'}")


def _print_record(record: dict[str, Any]) -> None:
    rating = f" {'★' * record['rating']}" if record.get("rating") else ""
    tags = " ".join(f"#{tag}" for tag in record.get("tags") or [])
    print(f"{TYPE_ICONS.get(record['type'], '')} {record['date']} {record['title']}{rating}  [{record['id']}]")
    if record.get("description"):
        print(f"    {record['description']}")
    if tags:
        print(f"    {tags}")


def _print_recommendation(item: dict[str, Any]) -> None:
    print(f"- {item['name']} ({format_match_score(item['score'])})  [{item['id']}]")
    print(f"    {item['reason']}")
    if item.get("details"):
        print(f"    {item['details']}")


def cmd_profile_show(client: LifeAgentClient, _args: argparse.Namespace) -> None:
    _print_profile(client.get_profile())


def cmd_profile_set(client: LifeAgentClient, args: argparse.Namespace) -> None:
    payload: dict[str, Any] = {"name": args.name}
    if args.location:
        payload["location"] = args.location
    preferences = {
        field: parse_tags(getattr(args, field)) for field in PREFERENCE_FIELDS if getattr(args, field) is not None
    }
    if preferences:
        payload["preferences"] = preferences
    routines = {key: getattr(args, field) for field, key in ROUTINE_FIELDS.items() if getattr(args, field)}
    if routines:
        payload["routines"] = routines
    result = client.update_profile(payload)
    print("Profile saved.")
    _print_profile(result["data"])


def cmd_records_list(client: LifeAgentClient, args: argparse.Namespace) -> None:
    result = client.get_records(rec_type=args.type, limit=args.limit, offset=args.offset)
    records = result["records"]
    if not records:
        print("No records yet.")
        return
    for record in records:
        _print_record(record)
    pagination = result["pagination"]
    print(f"Showing {len(records)} of {pagination['total']}")


def cmd_records_add(client: LifeAgentClient, args: argparse.Namespace) -> None:
    payload: dict[str, Any] = {"type": args.type, "title": args.title}
    if args.description:
        payload["description"] = args.description
    if args.rating is not None:
        payload["rating"] = args.rating
    if args.tags:
        payload["tags"] = parse_tags(args.tags)
    if args.location:
        payload["location"] = args.location
    if args.date:
        payload["date"] = args.date
    result = client.create_record(payload)
    print(result.get("message") or "Record saved.")
    _print_record(result["data"])


def cmd_records_delete(client: LifeAgentClient, args: argparse.Namespace) -> None:
    result = client.delete_record(args.record_id)
    print(result.get("message") or "Record deleted.")


def cmd_records_stats(client: LifeAgentClient, _args: argparse.Namespace) -> None:
    stats = client.get_stats()
    print(f"Total records: {stats['totalRecords']}")
    for rec_type, count in stats["byType"].items():
        print(f"  {TYPE_ICONS.get(rec_type, '')} {rec_type:<9} {count}")
    print(f"Average rating: {stats['averageRating']:.1f}")
    if stats["topTags"]:
        print("Top tags: " + ", ".join(f"#{item['tag']} ({item['count']})" for item in stats["topTags"]))


def cmd_recommend(client: LifeAgentClient, args: argparse.Namespace) -> None:
    result = client.get_recommendations(args.type, context=args.context, location=args.location, limit=args.limit)
    print(f"{TYPE_ICONS.get(result['type'], '')} {result['type']} recommendations")
    for item in result["recommendations"]:
        _print_recommendation(item)


def cmd_history(client: LifeAgentClient, args: argparse.Namespace) -> None:
    history = client.get_history(args.type)["history"]
    if not history:
        print("No recommendations yet.")
        return
    for entry in history:
        created = format_relative_time(_TIMESTAMP.validate_python(entry["createdAt"]))
        feedback = entry.get("feedback")
        verdict = "" if not feedback else (" 👍" if feedback["liked"] else " 👎")
        print(f"{TYPE_ICONS.get(entry['type'], '')} {entry['name']} ({format_match_score(entry['score'])}), {created}{verdict}")


def cmd_feedback(client: LifeAgentClient, args: argparse.Namespace) -> None:
    liked = args.verdict == "like"
    result = client.send_feedback(args.recommendation_id, liked=liked, reason=args.reason)
    print(result["message"])
    if args.analyze:
        analysis = client.analyze_feedback(args.recommendation_id, liked=liked, reason=args.reason)
        print(f"Adjustment: {analysis['adjustment']}")
        if analysis["prefer"]:
            print("More of: " + ", ".join(analysis["prefer"]))
        if analysis["avoid"]:
            print("Less of: " + ", ".join(analysis["avoid"]))
        if analysis["note"]:
            print(f"Note: {analysis['note']}")


def cmd_analyze(client: LifeAgentClient, _args: argparse.Namespace) -> None:
    analysis = client.analyze_patterns()
    for domain, patterns in analysis["patterns"].items():
        if patterns:
            print(f"{TYPE_ICONS.get(domain, '')} {domain}: " + "; ".join(patterns))
    for suggestion in analysis["suggestions"]:
        print(f"- {suggestion}")
    if analysis["insights"]:
        print(analysis["insights"])


def cmd_chat(client: LifeAgentClient, args: argparse.Namespace) -> None:
    print(client.chat(" ".join(args.message)))


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="life-agent", description="Personal life agent console")
    parser.add_argument("--base-url", help="API base URL (defaults to API_BASE_URL)")
    commands = parser.add_subparsers(dest="command", required=True)

    profile = commands.add_parser("profile", help="Show or update your profile")
    profile_commands = profile.add_subparsers(dest="profile_command", required=True)
    profile_commands.add_parser("show").set_defaults(handler=cmd_profile_show)
    profile_set = profile_commands.add_parser("set", help="Create or replace the profile")
    profile_set.add_argument("name")
    profile_set.add_argument("--location")
    for field in PREFERENCE_FIELDS:
        profile_set.add_argument(f"--{field}", help="comma separated tags")
    for field in ROUTINE_FIELDS:
        profile_set.add_argument(f"--{field.replace('_', '-')}", dest=field)
    profile_set.set_defaults(handler=cmd_profile_set)

    records = commands.add_parser("records", help="Manage activity records")
    record_commands = records.add_subparsers(dest="records_command", required=True)
    records_list = record_commands.add_parser("list")
    records_list.add_argument("--type", choices=["food", "travel", "exercise", "other"])
    records_list.add_argument("--limit", type=int)
    records_list.add_argument("--offset", type=int)
    records_list.set_defaults(handler=cmd_records_list)
    records_add = record_commands.add_parser("add")
    records_add.add_argument("type", choices=["food", "travel", "exercise", "other"])
    records_add.add_argument("title")
    records_add.add_argument("--description")
    records_add.add_argument("--rating", type=int, choices=range(1, 6))
    records_add.add_argument("--tags", help="comma or space separated, '#' optional")
    records_add.add_argument("--location")
    records_add.add_argument("--date", help="YYYY-MM-DD")
    records_add.set_defaults(handler=cmd_records_add)
    records_delete = record_commands.add_parser("delete")
    records_delete.add_argument("record_id")
    records_delete.set_defaults(handler=cmd_records_delete)
    record_commands.add_parser("stats").set_defaults(handler=cmd_records_stats)

    recommend = commands.add_parser("recommend", help="Ask for fresh recommendations")
    recommend.add_argument("type", choices=["food", "travel", "exercise"])
    recommend.add_argument("--context")
    recommend.add_argument("--location")
    recommend.add_argument("--limit", type=int)
    recommend.set_defaults(handler=cmd_recommend)

    history = commands.add_parser("history", help="List past recommendations")
    history.add_argument("--type", choices=["food", "travel", "exercise"])
    history.set_defaults(handler=cmd_history)

    feedback = commands.add_parser("feedback", help="Like or dislike a recommendation")
    feedback.add_argument("recommendation_id")
    feedback.add_argument("verdict", choices=["like", "dislike"])
    feedback.add_argument("--reason")
    feedback.add_argument("--analyze", action="store_true", help="ask how this changes future suggestions")
    feedback.set_defaults(handler=cmd_feedback)

    commands.add_parser("analyze", help="Find patterns in your records").set_defaults(handler=cmd_analyze)

    chat = commands.add_parser("chat", help="Send a message to the agent")
    chat.add_argument("message", nargs="+")
    chat.set_defaults(handler=cmd_chat)
    return parser


def main(
    argv: Sequence[str] | None = None,
    client_factory: Callable[[str | None], LifeAgentClient] | None = None,
) -> int:
    configure_logging()
    args = build_parser().parse_args(argv)
    factory = client_factory or (lambda base_url: LifeAgentClient(base_url))
    with factory(args.base_url) as client:
        try:
            args.handler(client, args)
        except (ApiError, httpx.HTTPError) as exc:
            print(friendly_error(exc), file=sys.stderr)
            return 1
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
