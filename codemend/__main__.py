import argparse
import logging
import os
import sys
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from typing import Iterator, List, Optional, Sequence

from .core.ast_parser import DIALECTS, detect_dialect, is_supported_file, should_skip_directory
from .core.catalog import CatalogRegistry
from .core.codemod import (
    CodemodError,
    OccurrenceState,
    PrintOptions,
    RewriteRule,
    load_rules,
    transform,
)


def setup_logging(log_level: str = "INFO") -> None:
    """Configure application logging."""
    logging.basicConfig(
        level=getattr(logging, log_level.upper()),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        handlers=[
            logging.StreamHandler(sys.stderr)
        ]
    )


logger = logging.getLogger(__name__)


@dataclass
class FileReport:
    path: str
    changed: bool = False
    rewritten: int = 0
    reported: int = 0
    error: Optional[str] = None


def iter_source_files(paths: Sequence[str]) -> Iterator[str]:
    """Yield supported source files under ``paths`` in a stable order."""
    for path in paths:
        if os.path.isfile(path):
            yield path
            continue
        for root, dirs, files in os.walk(path):
            dirs[:] = sorted(d for d in dirs if not should_skip_directory(d))
            for name in sorted(files):
                file_path = os.path.join(root, name)
                if is_supported_file(file_path):
                    yield file_path


def run_file(
    path: str,
    rules: Sequence[RewriteRule],
    options: PrintOptions,
    dialect: Optional[str],
    write: bool,
) -> FileReport:
    report = FileReport(path=path)
    file_dialect = dialect or detect_dialect(path)
    if file_dialect is None:
        report.error = "unsupported file type"
        return report

    try:
        with open(path, "r", encoding="utf-8") as f:
            source = f.read()
        result = transform(source, rules, dialect=file_dialect, options=options)
    except (OSError, UnicodeDecodeError, CodemodError) as e:
        logger.error(f"Failed to transform {path}: {e}")
        report.error = str(e)
        return report

    report.changed = result.changed
    report.rewritten = result.count(OccurrenceState.REWRITTEN)
    report.reported = result.count(OccurrenceState.REPORTED)
    if result.changed and write:
        with open(path, "w", encoding="utf-8") as f:
            f.write(result.output)
    return report


def _collect_rules(args: argparse.Namespace) -> List[RewriteRule]:
    rules: List[RewriteRule] = []
    for name in args.transform or []:
        entry = CatalogRegistry.get(name)
        if entry is None:
            available = ", ".join(e.name for e in CatalogRegistry.list_entries())
            raise SystemExit(f"Unknown transform: {name}. Available: {available}")
        rules.extend(entry.rules)
    for rule_file in args.rules or []:
        rules.extend(load_rules(rule_file))
    if not rules:
        raise SystemExit("Nothing to do: pass --transform and/or --rules")
    return rules


def cmd_list(args: argparse.Namespace) -> int:
    if args.package:
        entries = CatalogRegistry.for_package(args.package)
        if not entries:
            print(f"No transforms for {args.package}")
            return 1
    else:
        entries = CatalogRegistry.list_entries()
    for entry in entries:
        print(f"{entry.name:<28} {entry.description}")
    return 0


def cmd_run(args: argparse.Namespace) -> int:
    rules = _collect_rules(args)
    options = PrintOptions(
        quote=args.quote,
        trailing_comma=not args.no_trailing_comma,
        tab_width=args.tab_width,
        use_tabs=args.use_tabs,
        wrap_column=args.wrap_column,
    )
    files = list(iter_source_files(args.paths))
    logger.info(f"Transforming {len(files)} file(s) with {len(rules)} rule(s)")

    # Files are independent; each transform owns its own tree.
    with ThreadPoolExecutor(max_workers=args.workers) as pool:
        reports = list(pool.map(
            lambda path: run_file(path, rules, options, args.dialect, args.write),
            files,
        ))

    failed = 0
    for report in reports:
        if report.error:
            failed += 1
            print(f"ERR  {report.path}: {report.error}")
        elif report.changed:
            print(f"{'OK  ' if args.write else 'DRY '} {report.path} "
                  f"({report.rewritten} rewritten, {report.reported} reported)")

    changed = sum(1 for r in reports if r.changed)
    print(f"{len(reports)} file(s) processed, {changed} changed, {failed} failed")
    return 1 if failed else 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="CodeMend - structural codemods for JS/TS API migrations")
    parser.add_argument(
        "--log-level",
        type=str,
        default=os.getenv("CODEMEND_LOG_LEVEL", "WARNING"),
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging level"
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    list_parser = subparsers.add_parser("list", help="List built-in transforms")
    list_parser.add_argument("package", nargs="?", help="Only list transforms for this package")
    list_parser.set_defaults(func=cmd_list)

    run_parser = subparsers.add_parser("run", help="Apply transforms to source files")
    run_parser.add_argument("paths", nargs="+", help="Files or directories to transform")
    run_parser.add_argument("-t", "--transform", action="append", help="Built-in transform, e.g. memoize-one@5.0.0")
    run_parser.add_argument("-r", "--rules", action="append", help="YAML rule file")
    run_parser.add_argument("--dialect", choices=DIALECTS, default=None, help="Override dialect detection")
    run_parser.add_argument("--write", action="store_true", help="Write changes back (default: dry run)")
    run_parser.add_argument("--workers", type=int, default=4, help="Files transformed in parallel")
    run_parser.add_argument(
        "--quote",
        choices=["single", "double", "auto"],
        default="single",
        help="Quote style passed through to the printer; generated code has no string literals",
    )
    run_parser.add_argument("--no-trailing-comma", action="store_true")
    run_parser.add_argument("--tab-width", type=int, default=2)
    run_parser.add_argument("--use-tabs", action="store_true")
    run_parser.add_argument("--wrap-column", type=int, default=100)
    run_parser.set_defaults(func=cmd_run)
    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Main entry point for CodeMend."""
    args = build_parser().parse_args(argv)
    setup_logging(args.log_level)
    try:
        return args.func(args)
    except CodemodError as e:
        logger.error(str(e))
        return 2


if __name__ == "__main__":
    sys.exit(main())
