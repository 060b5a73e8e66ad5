"""CLI entry point for genre star charts.

    genresky view tmdb_5000_movies.csv
    genresky png  tmdb_5000_movies.csv -o results/genres.png
    genresky html tmdb_5000_movies.csv -o results/genres.html --mode simple

The CSV argument falls back to GENRESKY_DATA (a .env file is honoured).
"""

import argparse
import logging
import sys
from dataclasses import replace
from pathlib import Path

from dotenv import load_dotenv

from genresky.config import ConfigError, LayoutConfig, data_path, load_config
from genresky.ingest import MovieDataError, load_genres


def _print_err(msg: str) -> None:
    print(msg, file=sys.stderr)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="genresky", description="Movie genres as star clusters.")
    parser.add_argument("-v", "--verbose", action="store_true", help="debug logging")
    sub = parser.add_subparsers(dest="command", required=True)

    for name, help_text in (
        ("view", "open the interactive window"),
        ("png", "save a static PNG"),
        ("html", "save a self-contained SVG/HTML page"),
    ):
        p = sub.add_parser(name, help=help_text)
        p.add_argument("csv", nargs="?", help="movie CSV (default: $GENRESKY_DATA)")
        p.add_argument("--mode", choices=("simple", "grid"), help="layout mode")
        p.add_argument("--width", type=int, help="canvas width in px")
        p.add_argument("--height", type=int, help="canvas height in px")
        p.add_argument("--lang", choices=("en", "ko"), help="overlay language")
        if name != "view":
            p.add_argument("-o", "--output", type=Path, help="output file")
    return parser


def _config_from_args(args: argparse.Namespace) -> LayoutConfig:
    config = load_config()
    overrides = {
        k: v
        for k, v in (("mode", args.mode), ("width", args.width), ("height", args.height), ("lang", args.lang))
        if v is not None
    }
    return replace(config, **overrides)


def main(argv: list[str] | None = None) -> int:
    load_dotenv()
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    csv_path = args.csv or data_path()
    if not csv_path:
        _print_err("No CSV given and GENRESKY_DATA is not set")
        return 2

    try:
        config = _config_from_args(args)
        genres = list(load_genres(csv_path).values())
    except (ConfigError, FileNotFoundError, MovieDataError) as e:
        _print_err(str(e))
        return 2

    if args.command == "view":
        from genresky.viewer import run_viewer

        state = run_viewer(genres, config)
        if state.selected is not None:
            print(f"Last selected: {state.selected.title}")
        return 0

    if args.command == "png":
        from genresky.renderers.static import save_static_chart

        path = save_static_chart(genres, args.output, config)
    else:
        from genresky.renderers.svg_2d import render_svg_html

        path = args.output or Path("results") / f"genresky_{config.mode}.html"
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(render_svg_html(genres, config), encoding="utf-8")

    print(f"Saved: {path}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
