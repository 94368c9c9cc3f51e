import argparse
import json
import sys
from typing import Any, Dict, List, Optional

from . import __version__
from .database import QueryExecutor, get_executor, init_database
from .env import get_settings
from .errors import JoblyError, NotFoundError
from .repositories import JobRepository


def _print_json(data: Any) -> None:
    print(json.dumps(data, indent=2, default=str))


def cmd_init_db(args: argparse.Namespace) -> None:
    init_database(args.database_url)
    print(f"Tables ready at {args.database_url}")


def cmd_create(args: argparse.Namespace, repo: JobRepository) -> None:
    job = repo.create(args.title, args.salary, args.equity, args.company)
    _print_json(job)


def cmd_list(args: argparse.Namespace, repo: JobRepository) -> None:
    filters: Dict[str, Any] = {}
    if args.title is not None:
        filters["title"] = args.title
    if args.min_salary is not None:
        filters["minSalary"] = args.min_salary
    if args.has_equity:
        filters["hasEquity"] = True

    jobs = repo.list_all(filters)
    if not jobs:
        print("No jobs found.", file=sys.stderr)
    _print_json(jobs)


def cmd_get(args: argparse.Namespace, repo: JobRepository) -> None:
    _print_json(repo.get(args.id))


def cmd_update(args: argparse.Namespace, repo: JobRepository) -> None:
    data: Dict[str, Any] = {}
    for field in ("title", "salary", "equity"):
        value = getattr(args, field)
        if value is not None:
            data[field] = value
    _print_json(repo.update(args.id, data))


def cmd_remove(args: argparse.Namespace, repo: JobRepository) -> None:
    repo.remove(args.id)
    _print_json({"deleted": args.id})


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="jobly", description="jobly jobs data-access CLI")
    parser.add_argument("--version", action="store_true", help="Show version")
    parser.add_argument("--database-url", help="SQLAlchemy URL (default: DATABASE_URL from env)")

    subparsers = parser.add_subparsers(dest="command")
    ini = subparsers.add_parser("init-db", help="Create the companies and jobs tables")
    ini.set_defaults(func=cmd_init_db)

    crt = subparsers.add_parser("create", help="Create a job")
    crt.add_argument("--title", required=True, help="Job title")
    crt.add_argument("--salary", type=int, help="Yearly salary")
    crt.add_argument("--equity", help="Equity as a decimal string, e.g. 0.05")
    crt.add_argument("--company", required=True, help="Company handle")
    crt.set_defaults(func=cmd_create)

    lst = subparsers.add_parser("list", help="List jobs, optionally filtered")
    lst.add_argument("--title", help="Case-insensitive title substring")
    lst.add_argument("--min-salary", type=int, help="Minimum salary (inclusive)")
    lst.add_argument("--has-equity", action="store_true", help="Only jobs with equity above zero")
    lst.set_defaults(func=cmd_list)

    get = subparsers.add_parser("get", help="Show one job with its company name")
    get.add_argument("id", type=int, help="Job id")
    get.set_defaults(func=cmd_get)

    upd = subparsers.add_parser("update", help="Change some fields of a job")
    upd.add_argument("id", type=int, help="Job id")
    upd.add_argument("--title", help="New title")
    upd.add_argument("--salary", type=int, help="New salary")
    upd.add_argument("--equity", help="New equity as a decimal string")
    upd.set_defaults(func=cmd_update)

    rem = subparsers.add_parser("remove", help="Delete a job")
    rem.add_argument("id", type=int, help="Job id")
    rem.set_defaults(func=cmd_remove)

    return parser


def main(argv: Optional[List[str]] = None, executor: Optional[QueryExecutor] = None) -> None:
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.version:
        print(__version__)
        return

    if not hasattr(args, "func"):
        parser.print_help()
        return

    if args.database_url is None:
        args.database_url = get_settings().database_url

    try:
        if args.command == "init-db":
            args.func(args)
            return
        repo = JobRepository(executor or get_executor(args.database_url))
        args.func(args, repo)
    except JoblyError as e:
        print(f"Error: {e.message}", file=sys.stderr)
        raise SystemExit(1 if isinstance(e, NotFoundError) else 2)


if __name__ == "__main__":
    main()
