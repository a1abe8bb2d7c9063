"""CLI entrypoints for planning and previewing image drawings offline."""

from __future__ import annotations

import argparse
import json
from dataclasses import asdict
from pathlib import Path

from autodraw_core import DrawConfig, DrawingTurn, PreviewSurface, load_config, save_config
from autodraw_core.config import normalize
from autodraw_core.logging_setup import configure_logging, install_crash_hooks
from autodraw_palette import DEFAULT_PRESET_NAME, PaletteError, list_presets, preset_colors
from autodraw_planner import BrushConfigError, DrawMode, ImageLoadError


_TURN_ERRORS = (ImageLoadError, BrushConfigError, PaletteError)


def _print_json(data: object) -> None:
    print(json.dumps(data, indent=2, sort_keys=True, default=str))


def _effective_config(args: argparse.Namespace) -> DrawConfig:
    cfg = load_config()
    if getattr(args, "mode", None):
        cfg.draw.mode = args.mode
    if getattr(args, "brush", None) is not None:
        cfg.draw.brush_index = args.brush
    if getattr(args, "delay_ms", None) is not None:
        cfg.scheduler.delay_ms = args.delay_ms
    return cfg


def _surface(cfg: DrawConfig, args: argparse.Namespace) -> PreviewSurface:
    canvas = cfg.canvas_spec()
    return PreviewSurface(
        width=canvas.width,
        height=canvas.height,
        colors=preset_colors(args.palette),
        background=canvas.background,
        deactivate_after=getattr(args, "stop_after", None),
    )


def cmd_plan(args: argparse.Namespace) -> int:
    cfg = _effective_config(args)
    try:
        turn = DrawingTurn(_surface(cfg, args), cfg)
        commands = turn.prepare(args.image)
    except _TURN_ERRORS as exc:
        _print_json({"success": False, "error": str(exc)})
        return 2

    plan = turn.plan
    _print_json(
        {
            "success": True,
            "mode": plan.mode.value,
            "brush_index": plan.brush.index,
            "axis": plan.axis,
            "sample_size": [plan.sample_width, plan.sample_height],
            "primitives": len(plan.primitives),
            "commands": len(commands),
            "colors": plan.color_counts(),
            "cache": asdict(turn.palette.cache_info()),
        }
    )
    return 0


def cmd_preview(args: argparse.Namespace) -> int:
    cfg = _effective_config(args)
    surface = _surface(cfg, args)
    try:
        turn = DrawingTurn(surface, cfg)
        result = turn.draw(args.image)
    except _TURN_ERRORS as exc:
        _print_json({"success": False, "error": str(exc)})
        return 2

    out = surface.save(Path(args.out).expanduser().resolve())
    payload = asdict(result)
    payload["success"] = True
    payload["output"] = str(out)
    _print_json(payload)
    return 0


def cmd_palettes(_args: argparse.Namespace) -> int:
    _print_json({name: [c.to_hex() for c in preset_colors(name)] for name in list_presets()})
    return 0


def cmd_config_show(_args: argparse.Namespace) -> int:
    _print_json(asdict(load_config()))
    return 0


def cmd_config_set(args: argparse.Namespace) -> int:
    cfg = normalize(_effective_config(args))
    if args.background:
        cfg.canvas.background = args.background
        normalize(cfg)
    path = save_config(cfg)
    payload = asdict(cfg)
    payload["path"] = str(path)
    _print_json(payload)
    return 0


def _add_draw_options(cmd: argparse.ArgumentParser) -> None:
    cmd.add_argument("--mode", choices=[m.value for m in DrawMode], default=None)
    cmd.add_argument("--brush", type=int, default=None, help="Brush index from the surface brush menu")
    cmd.add_argument("--palette", choices=list_presets(), default=DEFAULT_PRESET_NAME)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="autodraw", description="Image to stroke compiler tools")
    sub = parser.add_subparsers(dest="command", required=True)

    plan_cmd = sub.add_parser("plan", help="Plan strokes for an image and print a summary")
    plan_cmd.add_argument("image", help="Image path, http(s) URL or data URL")
    _add_draw_options(plan_cmd)
    plan_cmd.set_defaults(func=cmd_plan)

    preview_cmd = sub.add_parser("preview", help="Draw an image onto an offline canvas and save a PNG")
    preview_cmd.add_argument("image", help="Image path, http(s) URL or data URL")
    preview_cmd.add_argument("--out", required=True, help="Output PNG path")
    preview_cmd.add_argument("--delay-ms", type=int, default=0)
    preview_cmd.add_argument("--stop-after", type=int, default=None, help="End the turn after N strokes")
    _add_draw_options(preview_cmd)
    preview_cmd.set_defaults(func=cmd_preview)

    palettes_cmd = sub.add_parser("palettes", help="List built-in palettes")
    palettes_cmd.set_defaults(func=cmd_palettes)

    config_cmd = sub.add_parser("config", help="Show or change saved drawing settings")
    config_sub = config_cmd.add_subparsers(dest="config_cmd", required=True)
    show_cmd = config_sub.add_parser("show", help="Print saved settings")
    show_cmd.set_defaults(func=cmd_config_show)
    set_cmd = config_sub.add_parser("set", help="Update saved settings")
    set_cmd.add_argument("--mode", choices=[m.value for m in DrawMode], default=None)
    set_cmd.add_argument("--brush", type=int, default=None)
    set_cmd.add_argument("--delay-ms", type=int, default=None)
    set_cmd.add_argument("--background", default=None, help="Canvas background as #RRGGBB")
    set_cmd.set_defaults(func=cmd_config_set)

    return parser


def main(argv: list[str] | None = None) -> int:
    configure_logging(load_config().logging)
    install_crash_hooks()
    parser = build_parser()
    args = parser.parse_args(argv)
    return int(args.func(args))


if __name__ == "__main__":
    raise SystemExit(main())
