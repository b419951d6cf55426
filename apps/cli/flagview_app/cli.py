"""CLI entrypoint for rendering flag descriptions."""

from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path

from flagview_core import AppConfig, configure_logging, get_logger, load_config
from flagview_layout import Color, FlagError, load_flag, render_flag
from flagview_output import (
    RendererError,
    create_renderer,
    default_renderer_name,
    describe_options,
    list_renderers,
    parse_options,
)


def _print_json(data: object) -> None:
    print(json.dumps(data, indent=2, sort_keys=True, default=str))


def _color_arg(value: str) -> Color:
    try:
        return Color.parse_hex(value)
    except FlagError as exc:
        raise argparse.ArgumentTypeError(str(exc)) from exc


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="flagview", description="Render flags described in YAML")
    parser.add_argument("-f", "--flag", type=Path, default=None, help="Path to the flag to view")
    parser.add_argument(
        "-r",
        "--renderer",
        default=None,
        help='Renderer to use (try "--renderer list" to list all available renderers)',
    )
    parser.add_argument(
        "-o",
        "--renderer-options",
        default=None,
        help='Options passed to the renderer, e.g. "true_color: true" (try "--renderer-options list")',
    )
    parser.add_argument(
        "-b",
        "--background",
        type=_color_arg,
        default=None,
        help="Background color in hex notation, e.g. #000000",
    )
    parser.add_argument("--config", type=Path, default=None, help="Optional settings file")
    return parser


def cmd_show(args: argparse.Namespace, parser: argparse.ArgumentParser, cfg: AppConfig) -> int:
    logger = get_logger()

    renderer_name = args.renderer or cfg.renderer.name or default_renderer_name()
    if renderer_name == "list":
        _print_json(list_renderers())
        return 0
    if renderer_name not in list_renderers():
        print(
            f'renderer {renderer_name} doesn\'t exist! try "--renderer list" to list all available renderers',
            file=sys.stderr,
        )
        return 1

    if args.renderer_options == "list":
        _print_json({"renderer": renderer_name, "options": describe_options(renderer_name)})
        return 0

    if args.flag is None:
        parser.error("the following arguments are required: -f/--flag")

    background = args.background or cfg.display.background_color
    try:
        # Stored options only apply to the renderer they were saved for.
        options = dict(cfg.renderer.options) if renderer_name == cfg.renderer.name else {}
        options.update(parse_options(args.renderer_options))
        renderer = create_renderer(renderer_name, options)
        flag = load_flag(args.flag)
        render_flag(renderer, flag, background)
    except FlagError as exc:
        logger.error("error in flag %s: %s", args.flag, exc, extra={"event": "flag_error", "path": args.flag, "field": getattr(exc, "field", None)})
        print(f"error parsing flag: {exc}", file=sys.stderr)
        return 1
    except RendererError as exc:
        logger.error("renderer %s failed: %s", renderer_name, exc, extra={"event": "renderer_error", "renderer": renderer_name})
        print(f"renderer {renderer_name} failed: {exc}", file=sys.stderr)
        return 1
    return 0


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    cfg = load_config(args.config)
    configure_logging(keep_files=cfg.logging.keep_log_files, console=False, level=cfg.logging.level)
    return int(cmd_show(args, parser, cfg))


if __name__ == "__main__":
    raise SystemExit(main())
