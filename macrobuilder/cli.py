import argparse
import inspect
from typing import List, Optional

from .common_tasks import TASKS


def _cmd_tasks(args: argparse.Namespace) -> int:
    for name, factory in TASKS.items():
        takes_name = bool(inspect.signature(factory).parameters)
        print(f"{name} NAME" if takes_name else name)
    return 0


def _cmd_render(args: argparse.Namespace) -> int:
    factory = TASKS[args.task]
    takes_name = bool(inspect.signature(factory).parameters)
    if takes_name and args.name is None:
        print(f"error: task '{args.task}' requires a NAME argument")
        return 2
    if not takes_name and args.name is not None:
        print(f"error: task '{args.task}' takes no NAME argument")
        return 2
    builder = factory(args.name) if takes_name else factory()
    print(builder.text if args.body else builder.to_script(), end="" if args.body else "\n")
    return 0


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="tekla-macro",
        description="Generate dialog automation macros for common host tasks.",
    )
    sp = p.add_subparsers(dest="command", required=True)

    tasks_p = sp.add_parser("tasks", help="List available tasks")
    tasks_p.set_defaults(func=_cmd_tasks)

    render_p = sp.add_parser("render", help="Print the macro generated for a task")
    render_p.add_argument("task", choices=sorted(TASKS))
    render_p.add_argument("name", nargs="?", help="Drawing, template or script name")
    render_p.add_argument("--body", action="store_true", help="Print command lines without the script envelope")
    render_p.set_defaults(func=_cmd_render)

    return p


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    return args.func(args)


if __name__ == "__main__":
    raise SystemExit(main())
