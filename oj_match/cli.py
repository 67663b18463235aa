from __future__ import annotations

import argparse
import logging
from pathlib import Path

from .cache import ResolutionCache
from .commands import check as cmd_check
from .commands import resolve as cmd_resolve
from .config import Settings, find_config
from .core.resolution import extract, normalize
from .registry import RegistryError, load_registry

LOG_FORMAT = "%(levelname).1s | %(name)s | %(message)s"

C_RESET = "\033[0m"
LEVEL_COLORS = {
    logging.DEBUG: "\033[36m",  # Cyan
    logging.INFO: "\033[37m",  # Light gray
    logging.WARNING: "\033[33m",  # Yellow
    logging.ERROR: "\033[31m",  # Red
    logging.CRITICAL: "\033[35m",  # Magenta
}


class ColorFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        message = super().format(record)
        color = LEVEL_COLORS.get(record.levelno)
        if not color:
            return message
        return f"{color}{message}{C_RESET}"


class WarningBufferHandler(logging.Handler):
    def __init__(self) -> None:
        super().__init__(level=logging.WARNING)
        self.records: list[str] = []

    def emit(self, record: logging.LogRecord) -> None:
        try:
            msg = self.format(record)
        except Exception:  # pragma: no cover
            msg = record.getMessage()
        self.records.append(msg)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Resolve judicial organizational unit names against a registry"
    )
    parser.add_argument("--config", type=Path, help="Path to oj-match.yaml")
    parser.add_argument(
        "--registry",
        type=Path,
        help="Registry file (JSON, YAML or text); overrides registry.path",
    )
    parser.add_argument("--log-level", default="WARNING", help="Python logging level")

    subparsers = parser.add_subparsers(dest="command", required=True)
    normalize_parser = subparsers.add_parser("normalize", help="Print normalized names")
    normalize_parser.add_argument("text", nargs="+")
    extract_parser = subparsers.add_parser(
        "extract", help="Print type, ordinal, specialty and city of names"
    )
    extract_parser.add_argument("text", nargs="+")
    resolve_parser = subparsers.add_parser(
        "resolve", help="Match queries against the registry"
    )
    resolve_parser.add_argument("query", nargs="+")
    resolve_parser.add_argument(
        "--suggest",
        action="store_true",
        help="List similar registry entries for queries without matches",
    )
    check_parser = subparsers.add_parser(
        "check", help="Validate a list of configured unit names against the registry"
    )
    check_parser.add_argument("names", type=Path, help="File with one configured name per entry")
    return parser


def configure_logging(level_name: str) -> WarningBufferHandler:
    log_level = getattr(logging, level_name.upper(), logging.WARNING)
    root_logger = logging.getLogger()
    root_logger.handlers.clear()
    root_logger.setLevel(log_level)

    color_handler = logging.StreamHandler()
    color_handler.setFormatter(ColorFormatter(LOG_FORMAT))
    root_logger.addHandler(color_handler)

    warn_buffer = WarningBufferHandler()
    warn_buffer.setFormatter(logging.Formatter(LOG_FORMAT))
    root_logger.addHandler(warn_buffer)
    return warn_buffer


def _load_registry(settings: Settings, override: Path | None) -> list[str]:
    path = override or settings.registry.path
    if path is None:
        raise SystemExit("No registry configured: pass --registry or set registry.path")
    try:
        return load_registry(path, settings.registry.name_field)
    except RegistryError as exc:
        raise SystemExit(str(exc)) from exc


def main(argv: list[str] | None = None) -> None:
    parser = build_parser()
    args = parser.parse_args(argv)
    warn_buffer = configure_logging(args.log_level)

    config_path = find_config(args.config)
    settings = Settings.load(config_path) if config_path else Settings()

    try:
        match args.command:
            case "normalize":
                for text in args.text:
                    print(normalize(text))
            case "extract":
                for text in args.text:
                    components = extract(normalize(text))
                    ordinal = components.ordinal if components.ordinal is not None else "-"
                    print(
                        f"{text}: type={components.type.value} ordinal={ordinal} "
                        f"specialty={components.specialty.value} city={components.city}"
                    )
            case "resolve":
                cache = ResolutionCache(
                    _load_registry(settings, args.registry),
                    ttl_seconds=settings.cache.ttl_seconds,
                    max_entries=settings.cache.max_entries,
                )
                report = cmd_resolve.run(
                    cache, args.query, settings.matching, suggest=args.suggest
                )
                for line in report.lines:
                    print(line)
                if not report.ok:
                    raise SystemExit(1)
            case "check":
                registry = _load_registry(settings, args.registry)
                try:
                    result = cmd_check.run(
                        args.names,
                        registry,
                        settings.matching,
                        name_field=settings.registry.name_field,
                    )
                except RegistryError as exc:
                    raise SystemExit(str(exc)) from exc
                for line in result.checks:
                    print(line)
                if not result.ok:
                    raise SystemExit(1)
            case _:
                parser.error("Unknown command")
    finally:
        if warn_buffer.records:
            print("\n\033[33mWarnings/Errors summary:\033[0m")
            for line in warn_buffer.records:
                print(f" - {line}")


if __name__ == "__main__":
    main()
