from __future__ import annotations

import argparse
import json
import logging
import sys

import uvicorn

from inventory.errors import ScanError
from inventory.scan import scan
from inventory.summarize import summarize_report


def setup_logging(verbose: bool) -> None:
	level = logging.DEBUG if verbose else logging.WARNING
	logging.basicConfig(
		level=level,
		format="%(asctime)s %(levelname)s %(name)s: %(message)s",
	)


def cmd_scan(args: argparse.Namespace) -> None:
	try:
		report = scan(args.path, args.exclude)
	except ScanError as e:
		print(f"error: {e}", file=sys.stderr)
		sys.exit(2)
	if args.text:
		print(summarize_report(report))
	else:
		print(json.dumps(report.model_dump(), indent=2))


def cmd_serve(args: argparse.Namespace) -> None:
	uvicorn.run("api:app", host=args.host, port=args.port, reload=args.reload)


def main() -> None:
	parser = argparse.ArgumentParser(prog="inventory")
	parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
	sub = parser.add_subparsers(dest="cmd", required=True)

	ps = sub.add_parser("scan", help="Scan a workspace and print the report JSON")
	ps.add_argument("path", help="Workspace directory holding the projects")
	ps.add_argument("--exclude", action="append", default=[], metavar="NAME",
					help="Additional directory name to ignore (repeatable)")
	ps.add_argument("--text", action="store_true", help="Print a plain-text summary instead of JSON")
	ps.set_defaults(func=cmd_scan)

	pv = sub.add_parser("serve", help="Run FastAPI server")
	pv.add_argument("--host", default="127.0.0.1")
	pv.add_argument("--port", type=int, default=8000)
	pv.add_argument("--reload", action="store_true")
	pv.set_defaults(func=cmd_serve)

	args = parser.parse_args()
	setup_logging(args.verbose)
	args.func(args)


if __name__ == "__main__":
	main()
