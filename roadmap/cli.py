"""Command line front-end for the progress tracker.

    roadmap-progress stats [--json]
    roadmap-progress list
    roadmap-progress set html completed
    roadmap-progress reset
    roadmap-progress serve --port 8000
"""

import argparse
import asyncio
import json
import os
import sys

from dotenv import load_dotenv

from roadmap.backends.sqlite import SqliteBackend
from roadmap.config import configure_logging, get_db_path
from roadmap.models.progress_record import ProgressStats
from roadmap.models.status import NodeStatus
from roadmap.sdk.roadmap_loader import RoadmapLoadError, load_roadmap
from roadmap.store import ProgressStore

_STATUS_MARKS = {
    NodeStatus.pending: " ",
    NodeStatus.in_progress: "~",
    NodeStatus.completed: "x",
    NodeStatus.skipped: "-",
}


def format_stats(stats: ProgressStats) -> str:
    """Render statistics as a human-readable block."""
    lines = []
    lines.append("=" * 40)
    lines.append(f"PROGRESS: {stats.progress_percentage:.1f}%")
    lines.append("=" * 40)
    lines.append(f"  Completed:   {stats.completed}/{stats.total}")
    lines.append(f"  In progress: {stats.in_progress}")
    lines.append(f"  Pending:     {stats.pending}")
    lines.append(f"  Skipped:     {stats.skipped}")
    lines.append("-" * 40)
    lines.append(f"  Required:    {stats.required_completed}/{stats.required_total}")
    lines.append(f"  Optional:    {stats.optional_completed}/{stats.optional_total}")
    return "\n".join(lines)


def format_nodes(store: ProgressStore) -> str:
    lines = []
    for node in store.nodes:
        if not node.trackable:
            lines.append("")
            lines.append(f"## {node.data.label}")
            continue
        mark = _STATUS_MARKS[node.data.status]
        lines.append(f"  [{mark}] {node.id:<20} {node.data.label} ({node.data.type.value})")
    return "\n".join(lines).lstrip("\n")


async def _open_store(roadmap_path: str | None) -> ProgressStore:
    backend = SqliteBackend(get_db_path())
    await backend.initialize()
    store = ProgressStore(backend)
    await store.initialize_nodes(load_roadmap(roadmap_path).nodes)
    return store


async def _run(args: argparse.Namespace) -> int:
    store = await _open_store(args.roadmap)

    if args.command == "stats":
        if args.json:
            print(json.dumps(store.stats.model_dump(by_alias=True), indent=2))
        else:
            print(format_stats(store.stats))
    elif args.command == "list":
        print(format_nodes(store))
    elif args.command == "set":
        node = store.update_node_status(args.node_id, args.status)
        if node is None:
            print(f"Error: no trackable node with id: {args.node_id}", file=sys.stderr)
            return 1
        if not all(await store.flush()):
            print("Warning: status changed but could not be saved", file=sys.stderr)
            return 2
        print(f"{node.id}: {node.data.status.value}")
    elif args.command == "reset":
        reset = store.reset_all_nodes()
        if not all(await store.flush()):
            print("Warning: some nodes could not be saved", file=sys.stderr)
            return 2
        print(f"Reset {len(reset)} nodes to pending")
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="roadmap-progress",
        description="Track progress through a learning roadmap.",
    )
    parser.add_argument(
        "--roadmap",
        help="path to the roadmap definition JSON (default: ROADMAP_DATA_PATH or bundled)",
    )
    parser.add_argument("--log-level", help="logging level (default: ROADMAP_LOG_LEVEL or INFO)")
    sub = parser.add_subparsers(dest="command", required=True)

    stats = sub.add_parser("stats", help="show progress statistics")
    stats.add_argument(
        "--json",
        action="store_true",
        help="output statistics as JSON instead of human-readable format",
    )

    sub.add_parser("list", help="list topics with their status")

    set_cmd = sub.add_parser("set", help="change a topic's status")
    set_cmd.add_argument("node_id")
    set_cmd.add_argument("status", choices=[s.value for s in NodeStatus])

    sub.add_parser("reset", help="set every topic back to pending")

    serve = sub.add_parser("serve", help="run the HTTP API")
    serve.add_argument("--host", default="127.0.0.1")
    serve.add_argument("--port", type=int, default=8000)
    return parser


def main(argv: list[str] | None = None) -> int:
    load_dotenv()
    args = build_parser().parse_args(argv)
    configure_logging(args.log_level)

    if args.command == "serve":
        import uvicorn

        if args.roadmap:
            os.environ["ROADMAP_DATA_PATH"] = args.roadmap
        uvicorn.run("roadmap_server.app:app", host=args.host, port=args.port)
        return 0

    try:
        return asyncio.run(_run(args))
    except RoadmapLoadError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
