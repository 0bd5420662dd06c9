"""
Command line front end for the trips and users screens.

Each command drives the same view-state holders the app screens use and prints
the resulting records as JSON.

    voyatek trips list
    voyatek trips create --destination Lagos --start 2024-06-01 --end 2024-06-05
    voyatek users patch user-1 --phone "+234 800 000 0000"
    voyatek countries search ng
"""
import argparse
import asyncio
import json
import logging
from datetime import datetime
from typing import Any, Optional, Sequence

from voyatek.config import settings
from voyatek.countries import get_country_provider
from voyatek.forms import FormValidationError, build_trip_draft, build_user_draft
from voyatek.integrations.transport import AiohttpTransport
from voyatek.models import TravelStyle, UserPatch, WireModel
from voyatek.state import ListState, LoadStatus, TripsState, UsersState

logger = logging.getLogger(__name__)


def _print(value: Any) -> None:
    if isinstance(value, WireModel):
        value = value.to_wire()
    elif isinstance(value, list):
        value = [v.to_wire() if isinstance(v, WireModel) else v for v in value]
    print(json.dumps(value, indent=2, ensure_ascii=False))


def _parse_date(text: str) -> datetime:
    try:
        return datetime.fromisoformat(text)
    except ValueError:
        raise argparse.ArgumentTypeError(f"not an ISO date: {text}")


async def _run_trips(args: argparse.Namespace, holder: TripsState) -> Any:
    if args.action == "list":
        return await holder.fetch_all()
    if args.action == "show":
        return await holder.fetch_one(args.id)
    if args.action == "create":
        draft = build_trip_draft(
            destination=args.destination,
            start=args.start,
            end=args.end,
            title=args.title,
            travel_style=args.style,
            description=args.description,
        )
        return await holder.create(draft)
    if args.action == "delete":
        return {"deleted": await holder.delete(args.id)}
    raise ValueError(f"unknown trips action {args.action}")


async def _run_users(args: argparse.Namespace, holder: UsersState) -> Any:
    if args.action == "list":
        return await holder.fetch_all()
    if args.action == "show":
        return await holder.fetch_one(args.id)
    if args.action == "create":
        return await holder.create(build_user_draft(args.name, args.email, args.phone, args.address))
    if args.action == "update":
        return await holder.update(args.id, build_user_draft(args.name, args.email, args.phone, args.address))
    if args.action == "patch":
        updates = UserPatch(name=args.name, email=args.email, phone=args.phone, address=args.address)
        if updates.is_empty():
            raise FormValidationError("Nothing to update")
        return await holder.patch(args.id, updates)
    if args.action == "delete":
        return {"deleted": await holder.delete(args.id)}
    raise ValueError(f"unknown users action {args.action}")


async def run_command(args: argparse.Namespace) -> int:
    async with AiohttpTransport() as transport:
        holder: ListState
        if args.resource == "trips":
            holder = TripsState(transport=transport, base_url=args.base_url)
            result = await _run_trips(args, holder)
        else:
            holder = UsersState(transport=transport, base_url=args.base_url)
            result = await _run_users(args, holder)

    if holder.status is LoadStatus.FAILED:
        logger.error(holder.error_message)
        return 1
    _print(result)
    return 0


def build_arg_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="voyatek", description="Voyatek trips and users client")
    p.add_argument("--base-url", default=None, help=f"API base URL (default {settings.api_base_url})")
    p.add_argument("--log-level", default=settings.log_level)
    resources = p.add_subparsers(dest="resource", required=True)

    trips = resources.add_parser("trips", help="Browse and plan trips")
    trip_actions = trips.add_subparsers(dest="action", required=True)
    trip_actions.add_parser("list")
    trip_actions.add_parser("show").add_argument("id")
    trip_actions.add_parser("delete").add_argument("id")
    create = trip_actions.add_parser("create")
    create.add_argument("--destination", required=True)
    create.add_argument("--start", type=_parse_date, required=True, help="ISO date or date-time")
    create.add_argument("--end", type=_parse_date, required=True, help="ISO date or date-time")
    create.add_argument("--title")
    create.add_argument("--style", choices=[s.value for s in TravelStyle], default=TravelStyle.SOLO.value)
    create.add_argument("--description")

    users = resources.add_parser("users", help="Manage the user directory")
    user_actions = users.add_subparsers(dest="action", required=True)
    user_actions.add_parser("list")
    user_actions.add_parser("show").add_argument("id")
    user_actions.add_parser("delete").add_argument("id")
    for name in ("create", "update", "patch"):
        sp = user_actions.add_parser(name)
        if name != "create":
            sp.add_argument("id")
        required = name != "patch"
        sp.add_argument("--name", required=required)
        sp.add_argument("--email", required=required)
        sp.add_argument("--phone")
        sp.add_argument("--address")

    countries = resources.add_parser("countries", help="Search the bundled country list")
    country_actions = countries.add_subparsers(dest="action", required=True)
    country_actions.add_parser("search").add_argument("text", nargs="?", default="")
    return p


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = build_arg_parser().parse_args(argv)
    logging.basicConfig(level=getattr(logging, str(args.log_level).upper(), logging.INFO))

    if args.resource == "countries":
        _print(get_country_provider().search(args.text))
        return 0

    try:
        return asyncio.run(run_command(args))
    except FormValidationError as e:
        logger.error(str(e))
        return 2


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
