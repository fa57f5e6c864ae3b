from __future__ import annotations

import argparse
import logging
import os
import sys
from pathlib import Path
from typing import Optional

from .config import load_config, merge_cli
from .engine import Impi
from .errors import ImpiUserError, SetupError
from .schemes import list_schemes, resolve_scheme
from .types import VerificationError
from .version import tool_version


class ConsoleErrorReporter:
    """Prints each failing file as `path: message` to stdout."""

    def __init__(self, stream=None):
        self.stream = stream or sys.stdout

    def report(self, error: VerificationError) -> None:
        self.stream.write(f"{error}\n")
        self.stream.flush()


def _setup_logging(verbose: bool) -> None:
    log = logging.getLogger("impi")
    level = logging.DEBUG if verbose or os.environ.get("IMPI_DEBUG") else logging.WARNING
    log.setLevel(level)
    if not log.handlers:
        h = logging.StreamHandler(sys.stderr)
        h.setFormatter(logging.Formatter("[%(levelname)s] %(message)s"))
        log.addHandler(h)


def _build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="impi",
        usage="%(prog)s [flags] PACKAGE [PACKAGE ...]",
        description="Проверка группировки и сортировки импортов Go",
        add_help=True,
    )
    p.add_argument("-v", "--version", action="version", version=f"%(prog)s {tool_version()}")
    p.add_argument(
        "packages",
        nargs="+",
        metavar="PACKAGE",
        help="пути в семантике go tool: dir, file.go, dir/... (рекурсивно)",
    )
    p.add_argument("--local", help="префикс импортов локального репозитория (например github.com/org/repo)")
    p.add_argument(
        "--scheme",
        help=f"схема проверки: {' | '.join(list_schemes())}",
    )
    p.add_argument("--ignore", help="glob для пропуска файлов (по имени файла, не по пути)")
    p.add_argument(
        "--skip-tests",
        action="store_true",
        default=None,
        help="не проверять файлы *_test.go",
    )
    p.add_argument(
        "--skip",
        action="append",
        metavar="REGEX",
        dest="skip_paths",
        help="пропускать пути, совпадающие с регулярным выражением (можно указать несколько)",
    )
    p.add_argument(
        "--ignore-generated",
        action="store_true",
        default=None,
        help="пропускать сгенерированные файлы (// Code generated ... DO NOT EDIT.)",
    )
    p.add_argument(
        "--workers",
        type=int,
        metavar="N",
        help="число параллельных проверок (по умолчанию: число CPU)",
    )
    p.add_argument(
        "--config",
        type=Path,
        metavar="FILE",
        help="YAML-конфиг (по умолчанию .impi.yaml в текущем каталоге, если есть)",
    )
    p.add_argument("--verbose", action="store_true", help="отладочный лог в stderr")
    return p


def main(argv: Optional[list[str]] = None) -> int:
    ns = _build_parser().parse_args(argv)
    _setup_logging(ns.verbose)

    try:
        cfg = merge_cli(load_config(ns.config), {
            "scheme": ns.scheme,
            "local": ns.local,
            "ignore": ns.ignore,
            "skip_tests": ns.skip_tests,
            "skip_paths": ns.skip_paths,
            "ignore_generated": ns.ignore_generated,
            "workers": ns.workers,
        })
        if cfg.workers is not None and cfg.workers < 1:
            raise SetupError(f"--workers must be positive, got {cfg.workers}")
        # fail on a bad scheme before touching the file system
        resolve_scheme(cfg.scheme)
    except SetupError as e:
        sys.stderr.write(str(e).rstrip() + "\n")
        return 2

    try:
        Impi(cfg.workers).verify(ns.packages, cfg.to_options(), ConsoleErrorReporter())
    except SetupError as e:
        sys.stderr.write(str(e).rstrip() + "\n")
        return 2
    except (ImpiUserError, OSError) as e:
        sys.stderr.write(f"\nimpi verification failed: {e}\n")
        return 1

    return 0


if __name__ == "__main__":
    raise SystemExit(main())
