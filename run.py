"""dungeongen CLI entry point.

Provides subcommands for running the HTTP API server and for generating a
single dungeon straight to the terminal. Accepts configuration via flags,
a JSON config file and DUNGEON_* environment variables, with optional .env
loading.

Run `python run.py --help` for details.
"""

import argparse
import json
import os
import signal
import sys
from textwrap import dedent

from colorama import Fore, Style
from colorama import init as _color_init
from dotenv import load_dotenv

from dungeongen import __version__

_color_init()

# Glyph -> color for the ASCII map (corridor classes stand out from rooms)
GLYPH_COLORS = {
    "S": Fore.GREEN + Style.BRIGHT,
    "G": Fore.RED + Style.BRIGHT,
    "E": Fore.YELLOW + Style.BRIGHT,
    "x": Fore.MAGENTA,
    "+": Fore.CYAN,
    "-": Fore.WHITE,
    "~": Fore.BLUE,
}


def _color_enabled(args) -> bool:
    # Disable colors if output is not a real terminal (e.g., during pytest capture)
    if getattr(args, "no_color", False):
        return False
    return sys.stdout.isatty()


def colorize_map(text: str) -> str:
    out = []
    for ch in text:
        color = GLYPH_COLORS.get(ch)
        out.append(f"{color}{ch}{Style.RESET_ALL}" if color else ch)
    return "".join(out)


def parse_args(argv: list[str]) -> argparse.Namespace:
    description = """
    dungeongen: procedural BSP dungeon generator

    Run the JSON API server or generate one dungeon and print it. Configuration
    can be provided via CLI flags, a JSON config file or environment variables.
    If several are present, CLI flags take precedence over the file, and the
    file over the environment.
    """

    epilog = dedent(
        """
        Environment variables:
          HOST                   Bind address for the web server (default: 0.0.0.0)
          PORT                   Port for the web server (default: 5000)
          DUNGEON_WIDTH/HEIGHT   Grid size used when no flag is given
          DUNGEON_SEED           Seed used when no flag is given
          DUNGEONGEN_LOG_LEVEL   debug | info | warn | error (default: info)
          DUNGEONGEN_LOG_JSON    1 to emit JSON log lines

        Examples:
          # Run the server on the default host and port
          python run.py server

          # Print a 40x40 dungeon for seed 42
          python run.py generate --seed 42 --width 40 --height 40

          # Use run detection for eventable cells, output JSON
          python run.py generate --config runs.json --json

          # Load variables from .env then run the server
          python run.py --env-file .env server
        """
    )

    parser = argparse.ArgumentParser(
        prog="dungeongen",
        description=dedent(description),
        epilog=epilog,
        formatter_class=argparse.RawTextHelpFormatter,
    )

    parser.add_argument(
        "--env-file",
        dest="env_file",
        help="Path to a .env file to load before processing flags",
    )

    parser.add_argument(
        "--version",
        action="version",
        version=f"dungeongen {__version__}",
    )

    subparsers = parser.add_subparsers(dest="command")

    # server subcommand
    server_parser = subparsers.add_parser(
        "server",
        help="Run the JSON API web server",
        formatter_class=argparse.RawTextHelpFormatter,
        description="Run the Flask dungeon API server",
    )
    server_parser.add_argument(
        "--host",
        default=None,
        help="Host interface to bind (default: env HOST or 0.0.0.0)",
    )
    server_parser.add_argument(
        "--port",
        type=int,
        default=None,
        help="Port to listen on (default: env PORT or 5000)",
    )
    server_parser.add_argument(
        "--debug",
        action="store_true",
        help="Enable Flask debug mode (reloader + debugger)",
    )

    # generate subcommand
    gen_parser = subparsers.add_parser(
        "generate",
        help="Generate one dungeon and print it",
        formatter_class=argparse.RawTextHelpFormatter,
        description="Generate one dungeon and print the ASCII map (default) or the JSON result",
    )
    gen_parser.add_argument("--seed", default=None, help="Integer or string seed (default: system entropy)")
    gen_parser.add_argument("--width", type=int, default=None, help="Grid width in cells")
    gen_parser.add_argument("--height", type=int, default=None, help="Grid height in cells")
    gen_parser.add_argument(
        "--config",
        dest="config_file",
        default=None,
        help="JSON file with GenerationConfig fields",
    )
    gen_parser.add_argument(
        "--eventable-mode",
        choices=["random", "runs"],
        default=None,
        help="Eventable selection strategy",
    )
    gen_parser.add_argument("--json", action="store_true", help="Print the JSON result instead of the map")
    gen_parser.add_argument("--no-color", action="store_true", help="Disable colored map output")

    # If no subcommand provided, default to server
    if len(argv) == 0:
        argv = ["server"]

    args = parser.parse_args(argv)
    return args


def _build_config(args):
    from dungeongen.dungeon import GenerationConfig, InvalidConfigurationError, apply_env_overrides

    config = apply_env_overrides(GenerationConfig())
    if args.config_file:
        with open(args.config_file, "r", encoding="utf-8") as f:
            data = json.load(f)
        if not isinstance(data, dict):
            raise InvalidConfigurationError([f"{args.config_file} must contain a JSON object"])
        config = GenerationConfig.from_mapping(data, base=config)
    overrides = {}
    if args.seed is not None:
        overrides["seed"] = args.seed
    if args.width is not None:
        overrides["width"] = args.width
    if args.height is not None:
        overrides["height"] = args.height
    if args.eventable_mode:
        overrides["eventable"] = {"mode": args.eventable_mode}
    if overrides:
        config = GenerationConfig.from_mapping(overrides, base=config)
    return config.validate()


def run_generate(args) -> int:
    from dungeongen.dungeon import Dungeon, InvalidConfigurationError, render_ascii

    try:
        config = _build_config(args)
    except InvalidConfigurationError as exc:
        print(f"[ERROR] {exc}", file=sys.stderr)
        return 2
    except (OSError, ValueError) as exc:
        print(f"[ERROR] could not read config file: {exc}", file=sys.stderr)
        return 2
    dungeon = Dungeon(config=config)
    if args.json:
        print(json.dumps(dungeon.to_dict(), indent=2))
        return 0
    text = render_ascii(dungeon)
    print(colorize_map(text) if _color_enabled(args) else text)
    m = dungeon.metrics
    sg = dungeon.start_goal
    print(
        f"seed={dungeon.seed} rooms={len(dungeon.rooms)} edges={len(dungeon.edges)} "
        f"eventable={dungeon.path_classes.counts()['eventable']} "
        f"start_goal={'yes' if sg else 'no'} runtime_ms={m.get('runtime_ms', 0)}"
    )
    return 0


def main(argv: list[str]) -> int:
    # Load .env if requested, otherwise the default .env if present (no error if missing)
    args = parse_args(argv)
    if getattr(args, "env_file", None):
        load_dotenv(args.env_file)
    else:
        load_dotenv()

    mode = (getattr(args, "command", None) or "server").lower()
    if mode == "generate":
        return run_generate(args)

    # Resolve configuration from CLI flags or env vars
    host = getattr(args, "host", None) or os.getenv("HOST", "0.0.0.0")
    port = int(getattr(args, "port", None) or os.getenv("PORT", "5000"))
    debug = bool(getattr(args, "debug", False) or os.getenv("FLASK_DEBUG") == "1")

    def handle_sigint(sig, frame):
        print("\n[INFO] Shutting down server...")
        sys.exit(0)

    signal.signal(signal.SIGINT, handle_sigint)

    # Import server entrypoints only after environment is ready
    from dungeongen.logging_utils import log
    from dungeongen.server import start_server

    color = sys.stdout.isatty()

    def label(text: str) -> str:
        return f"{Fore.YELLOW}{text}{Style.RESET_ALL}" if color else text

    def value(val: str | int) -> str:
        return f"{Fore.GREEN}{val}{Style.RESET_ALL}" if color else str(val)

    title = f"{Fore.CYAN}{Style.BRIGHT}Dungeon Generator API{Style.RESET_ALL}" if color else "Dungeon Generator API"
    divider = (Fore.MAGENTA + "=" * 40 + Style.RESET_ALL) if color else "=" * 40
    lines = [
        divider,
        f"  {title}",
        divider,
        f"  {label('Host:'):12} {value(host)}",
        f"  {label('Port:'):12} {value(port)}",
        f"  {label('Debug:'):12} {value('YES' if debug else 'NO')}",
        f"  {label('Version:'):12} {value(__version__)}",
        divider,
        "",
    ]
    print("\n".join(lines))
    log.info(event="listen", host=host, port=port, debug=debug)
    start_server(host=host, port=port, debug=debug)
    return 0


def _console_main() -> int:
    return main(sys.argv[1:])


if __name__ == "__main__":
    raise SystemExit(main(sys.argv[1:]))
