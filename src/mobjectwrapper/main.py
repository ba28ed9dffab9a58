"""
Command-Line Entry Point
========================
Small tooling around saved scenes.

Commands:
    info FILE              List the mobjects of a scene with their current kind.
    export FILE OUT        Write the render data of every mobject to OUT (.h5).
    preview FILE           Plot the scene with matplotlib.
    demo OUT               Write a sample scene in which mobjects change kind.

Exit codes: 0 success, 1 handled error, 2 usage error (argparse).
"""
import argparse
import logging
import sys
from typing import Optional, Sequence

import numpy as np

from mobjectwrapper.logging_config import setup_logging
from mobjectwrapper.model.io import IOManager
from mobjectwrapper.model.material import Material, Style
from mobjectwrapper.model.measures import describe
from mobjectwrapper.model.mobject import Mobject
from mobjectwrapper.model.state import SceneState

logger = logging.getLogger(__name__)


def build_demo_scene() -> SceneState:
    """A square stretched into a rectangle and a circle stretched into an ellipse."""
    state = SceneState(scene_name="Kind changes")

    square = Mobject.square(2.0, position=(-3.0, 0.0), name="square", style=Style(stroke_color="#58C4DD"))
    square.stretch(2.0, dim=0)

    circle = Mobject.circle(1.0, position=(3.0, 0.0), name="circle", style=Style(stroke_color="#FC6255"))
    circle.stretch(0.5, dim=1)

    arc = Mobject.arc(1.0, 0.0, np.pi, arc_center=(0.0, 2.0), name="arc")
    arc.apply_matrix([[1.0, 0.5], [0.0, 1.0]])

    disc = Mobject.circle(0.5, position=(0.0, -2.0), name="disc", material=Material.PRIMITIVE,
                          style=Style(fill_color="#83C167", fill_opacity=0.8))

    state.add(Mobject(name="shapes", submobjects=[square, circle]), arc, disc)
    return state


def _print_tree(mob: Mobject, depth: int = 0) -> None:
    print(f"{'  ' * depth}{mob.name} [{mob.kind}] {describe(mob)}")
    for sub in mob:
        _print_tree(sub, depth + 1)


def _cmd_info(args: argparse.Namespace) -> int:
    state = SceneState()
    IOManager.load_scene(state, args.file)
    print(f"Scene: {state.scene_name}")
    for mob in state.mobjects:
        _print_tree(mob)
    return 0


def _cmd_export(args: argparse.Namespace) -> int:
    state = SceneState()
    IOManager.load_scene(state, args.file)
    count = IOManager.export_render_data(state, args.out)
    print(f"Exported {count} item(s) to {args.out}")
    return 0


def _cmd_preview(args: argparse.Namespace) -> int:
    from mobjectwrapper.rendering import render
    from mobjectwrapper.rendering.preview import plot_render_data

    state = SceneState()
    IOManager.load_scene(state, args.file)
    if args.material:
        for mob in state.all_mobjects():
            mob.material = Material(args.material)
    items = [item for mob in state.mobjects for item in render(mob)]
    plot_render_data(items, show=True, title=state.scene_name)
    return 0


def _cmd_demo(args: argparse.Namespace) -> int:
    state = build_demo_scene()
    IOManager.save_scene(state, args.out)
    print(f"Demo scene written to {args.out}")
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="mobjectwrapper", description=__doc__.splitlines()[1])
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging.")
    parser.add_argument("--log-file", default=None, help="Also write logs to this file.")
    sub = parser.add_subparsers(dest="command", required=True)

    p_info = sub.add_parser("info", help="List mobjects of a scene.")
    p_info.add_argument("file")
    p_info.set_defaults(func=_cmd_info)

    p_export = sub.add_parser("export", help="Export render data.")
    p_export.add_argument("file")
    p_export.add_argument("out")
    p_export.set_defaults(func=_cmd_export)

    p_preview = sub.add_parser("preview", help="Plot a scene.")
    p_preview.add_argument("file")
    p_preview.add_argument("--material", choices=[m.value for m in Material], default=None)
    p_preview.set_defaults(func=_cmd_preview)

    p_demo = sub.add_parser("demo", help="Write a sample scene.")
    p_demo.add_argument("out")
    p_demo.set_defaults(func=_cmd_demo)
    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    setup_logging(level=logging.DEBUG if args.verbose else logging.WARNING, log_file=args.log_file)

    try:
        return args.func(args)
    except (OSError, ValueError, KeyError) as e:
        logger.error(f"{args.command} failed: {e}")
        print(f"Error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
