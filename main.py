#!/usr/bin/env python3
"""
Taskboard -- personal task tracking from the command line.

Usage:
  python main.py serve [--host 127.0.0.1] [--port 4000] [--reload]
  python main.py register --username ann --email a@x.com --password secret
  python main.py tasks --email a@x.com --password secret
  python main.py add   --email a@x.com --password secret --title "buy milk" [--description "2l"]
  python main.py done  --email a@x.com --password secret --id 3
  python main.py rm    --email a@x.com --password secret --id 3
  python main.py tasks --email a@x.com --password secret --json

Every command except serve and register logs in first. The CLI is one
process serving one user, so it keeps the identity in a GlobalSession -- the
single-slot session the resolvers were originally written around.

Environment variables:
  DATABASE_URL  SQLAlchemy URL (default: sqlite file next to this script)
  SECRET_KEY    Needed by serve (or DEBUG=true). The other commands never
                sign tokens and run with a throwaway key when it is unset.
"""

import argparse
import json
import os
import secrets
import sys
from typing import Optional

from auth.session import GlobalSession
from auth.store import UserStore
from core.config import get_settings
from resolvers import OPERATIONS, ResolverContext
from tasks.store import TaskStore


def _print_task(task: dict) -> None:
    mark = "x" if task["completed"] else " "
    line = f"  [{mark}] {task['id']:>4}  {task['title']}"
    if task.get("description"):
        line += f" -- {task['description']}"
    print(line)


def _render(result, as_json: bool) -> int:
    """Print an operation result and return the process exit code."""
    data = result.model_dump(mode="json", by_alias=True)
    if as_json:
        print(json.dumps(data, indent=2))
        return 1 if data.get("error") else 0
    if data.get("error"):
        print(f"  [!] {data['error']}", file=sys.stderr)
        return 1
    if "tasks" in data:
        if not data["tasks"]:
            print("  No tasks.")
        for task in data["tasks"]:
            _print_task(task)
    elif "task" in data:
        _print_task(data["task"])
    elif "user" in data:
        user = data["user"]
        print(f"  {user['username']} <{user['email']}> (id {user['id']})")
    elif data.get("success"):
        print("  Deleted.")
    return 0


def _serve(args: argparse.Namespace) -> int:
    import uvicorn

    uvicorn.run("asgi:app", host=args.host, port=args.port, reload=args.reload)
    return 0


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="taskboard",
        description="Taskboard -- personal task tracking.",
    )
    parser.add_argument("--json", action="store_true", help="Print the raw result envelope as JSON")
    sub = parser.add_subparsers(dest="command", required=True)

    serve = sub.add_parser("serve", help="Run the HTTP API and frontend")
    serve.add_argument("--host", default="127.0.0.1")
    serve.add_argument("--port", type=int, default=4000)
    serve.add_argument("--reload", action="store_true", help="Restart on code changes (development)")

    register = sub.add_parser("register", help="Create an account")
    register.add_argument("--username", required=True)
    register.add_argument("--email", required=True)
    register.add_argument("--password", required=True)

    def _with_login(name: str, help_text: str) -> argparse.ArgumentParser:
        p = sub.add_parser(name, help=help_text)
        p.add_argument("--email", required=True)
        p.add_argument("--password", required=True)
        return p

    _with_login("tasks", "List your tasks")
    add = _with_login("add", "Create a task")
    add.add_argument("--title", required=True)
    add.add_argument("--description", default=None)
    done = _with_login("done", "Mark a task completed")
    done.add_argument("--id", required=True, dest="task_id")
    rm = _with_login("rm", "Delete a task")
    rm.add_argument("--id", required=True, dest="task_id")
    return parser


def main(argv: Optional[list[str]] = None) -> int:
    args = _build_parser().parse_args(argv)

    if args.command == "serve":
        return _serve(args)

    # Settings insists on a key; nothing here signs or reads a token.
    if not os.environ.get("SECRET_KEY"):
        os.environ["SECRET_KEY"] = secrets.token_hex(32)
    db_url = get_settings().database_url
    ctx = ResolverContext(users=UserStore(db_url), tasks=TaskStore(db_url), session=GlobalSession())
    try:
        if args.command == "register":
            result = OPERATIONS["register"](ctx, username=args.username, email=args.email, password=args.password)
            return _render(result, args.json)

        login = OPERATIONS["login"](ctx, email=args.email, password=args.password)
        if login.error:
            return _render(login, args.json)

        if args.command == "tasks":
            result = OPERATIONS["tasks"](ctx)
        elif args.command == "add":
            result = OPERATIONS["createTask"](ctx, title=args.title, description=args.description)
        elif args.command == "done":
            result = OPERATIONS["updateTask"](ctx, id=args.task_id, completed=True)
        else:
            result = OPERATIONS["deleteTask"](ctx, id=args.task_id)
        return _render(result, args.json)
    finally:
        ctx.users.close()
        ctx.tasks.close()


if __name__ == "__main__":
    sys.exit(main())
