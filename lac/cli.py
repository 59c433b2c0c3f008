from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional

from ruamel.yaml import YAML

from .config import Config, load_config
from .engine import FileResult, check_file
from .errors import ConfigError, LACUserError
from .files import FileCollector
from .version import tool_version

logger = logging.getLogger(__name__)

_yaml = YAML(typ="safe")

EXIT_OK = 0
EXIT_REPORTS = 1
EXIT_USAGE = 2


def _build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="lac",
        description="Require blank lines around comments in JavaScript/TypeScript sources",
        add_help=True,
    )
    p.add_argument("-v", "--version", action="version", version=f"%(prog)s {tool_version()}")
    p.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="logging level (stderr)",
    )
    sub = p.add_subparsers(dest="cmd", required=True)

    # Shared arguments for check/fix/options
    def add_common(sp: argparse.ArgumentParser) -> None:
        sp.add_argument(
            "--config",
            type=Path,
            help="configuration file (default: lac.yaml or .lac.yaml in the current directory)",
        )
        sp.add_argument(
            "--set",
            action="append",
            metavar="KEY=VALUE",
            dest="overrides",
            help="override a rule option, e.g. --set allowBlockStart=true (repeatable)",
        )

    sp_check = sub.add_parser("check", help="report comments without surrounding blank lines")
    add_common(sp_check)
    sp_check.add_argument("paths", nargs="*", type=Path, help="files or directories (default: .)")
    sp_check.add_argument("--format", choices=["text", "json"], default="text", help="output format")

    sp_fix = sub.add_parser("fix", help="insert the missing blank lines in place")
    add_common(sp_fix)
    sp_fix.add_argument("paths", nargs="*", type=Path, help="files or directories (default: .)")

    sp_options = sub.add_parser("options", help="print the effective rule options (JSON)")
    add_common(sp_options)

    return p


def _parse_overrides(items: Optional[List[str]]) -> Dict[str, Any]:
    """Parse KEY=VALUE items; values are read as YAML scalars (true, false, strings)."""
    result: Dict[str, Any] = {}
    for item in items or []:
        if "=" not in item:
            raise ConfigError(f"Invalid override '{item}'. Expected 'KEY=VALUE'")
        key, raw = item.split("=", 1)
        key = key.strip()
        if key == "ignorePattern":
            result[key] = raw
        else:
            result[key] = _yaml.load(raw) if raw.strip() else None
    return result


def _load(ns: argparse.Namespace) -> Config:
    cfg = load_config(ns.config)
    overrides = _parse_overrides(getattr(ns, "overrides", None))
    if overrides:
        cfg.options = cfg.options.merged(overrides)
        # an overridden ignorePattern is compiled before any command runs
        cfg.options.compile()
    return cfg


def _collect(ns: argparse.Namespace, cfg: Config) -> List[Path]:
    paths = ns.paths or [Path(".")]
    return FileCollector(cfg.files).collect(paths)


def _run_files(files: List[Path], cfg: Config, fix: bool) -> List[FileResult]:
    compiled = cfg.options.compile()
    results = []
    for path in files:
        try:
            results.append(check_file(path, compiled, fix=fix))
        except UnicodeDecodeError as e:
            logger.warning("Skipping %s: not valid UTF-8 (%s)", path, e)
    return results


def _emit_text(results: List[FileResult]) -> None:
    for result in results:
        for report in result.reports:
            sys.stdout.write(
                f"{result.path}:{report.line}:{report.column}: {report.message} [{report.message_id}]\n"
            )


def _emit_json(results: List[FileResult]) -> None:
    data = {
        "files": [
            {
                "path": str(result.path),
                "parseError": result.parse_error,
                "reports": [report.to_dict() for report in result.reports],
            }
            for result in results
        ],
        "total": sum(len(result.reports) for result in results),
    }
    sys.stdout.write(json.dumps(data, ensure_ascii=False, indent=2) + "\n")


def main(argv: list[str] | None = None) -> int:
    ns = _build_parser().parse_args(argv)
    logging.basicConfig(level=getattr(logging, ns.log_level), format="[%(levelname)s] %(message)s")

    try:
        cfg = _load(ns)

        if ns.cmd == "options":
            sys.stdout.write(json.dumps(cfg.options.to_dict(), indent=2) + "\n")
            return EXIT_OK

        files = _collect(ns, cfg)
        logger.info("%d file(s) to check", len(files))

        if ns.cmd == "check":
            results = _run_files(files, cfg, fix=False)
            if ns.format == "json":
                _emit_json(results)
            else:
                _emit_text(results)
            return EXIT_REPORTS if any(r.reports for r in results) else EXIT_OK

        if ns.cmd == "fix":
            results = _run_files(files, cfg, fix=True)
            for result in results:
                if result.fixed:
                    sys.stdout.write(f"fixed {result.path}\n")
            _emit_text(results)
            return EXIT_REPORTS if any(r.reports for r in results) else EXIT_OK

    except LACUserError as e:
        sys.stderr.write(str(e).rstrip() + "\n")
        return EXIT_USAGE

    return EXIT_USAGE


if __name__ == "__main__":
    raise SystemExit(main())
