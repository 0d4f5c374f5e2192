"""poet: an iterative poet that writes poems line by line with an LLM.

Typical usage:

    poet                                   # same as `poet create`
    poet create --style haiku --theme Seasons
    poet create -g "about the sea, 6 lines long"
    poet list-models
    poet save-config --style sonnet --theme Love
"""

from __future__ import annotations

import argparse
import asyncio
import sys
from collections.abc import Sequence

from dotenv import load_dotenv

from agent.graph import compose_poem
from core.config import load_config
from core.llm_service import ChatModelService
from core.logging_setup import setup_logger
from core.orchestrator import list_models, resolve_model
from core.poet_config import PoetConfig, load_bio, load_poet_config, merge_request, save_poet_config

COMMANDS = ("create", "list-models", "save-config")
DEFAULT_COMMAND = "create"


def _add_poem_options(p: argparse.ArgumentParser, verb: str) -> None:
    p.add_argument("-m", "--model", help=f"Model to {verb}.")
    p.add_argument("-t", "--title", help=f"Title to {verb}.")
    p.add_argument("-s", "--seed-line", dest="seed_line", help=f"Starting line to {verb}.")
    p.add_argument("--theme", help=f"Theme to {verb}.")
    p.add_argument("--style", help=f'Style to {verb} (e.g. "haiku", "sonnet", "limerick").')


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="poet",
        description="An iterative poet that creates poems line by line using an LLM.",
    )
    sub = parser.add_subparsers(dest="command")

    create = sub.add_parser("create", help="Create a new poem.")
    _add_poem_options(create, "use")
    create.add_argument(
        "-g",
        "--guidance",
        help='Free-form instruction, e.g. "keep it playful, 8 lines long".',
    )

    models = sub.add_parser("list-models", help="List the models the backend offers.")

    for p in (create, models):
        p.add_argument("-v", "--verbose", action="store_true", help="Log every model call.")

    save = sub.add_parser("save-config", help="Save settings to a .poet file for future runs.")
    _add_poem_options(save, "save")
    return parser


def _with_default_command(argv: Sequence[str]) -> list[str]:
    args = list(argv)
    if not args or (args[0] not in COMMANDS and args[0] not in ("-h", "--help")):
        return [DEFAULT_COMMAND, *args]
    return args


async def _create(args: argparse.Namespace) -> None:
    cfg = load_config()
    saved = load_poet_config()
    bio = load_bio()
    if bio:
        print("Loaded persona from ~/.me.toon")

    requested = args.model or (saved.model if saved else None) or cfg.model
    if requested:
        print(f"Using model: {requested}\n")
    else:
        print("No model specified, looking for the best available model...")
    model = await resolve_model(cfg, requested)
    if not requested:
        print(f"Found model: {model}\n")

    req = merge_request(vars(args), saved, user_bio=bio, guidance=args.guidance)
    service = ChatModelService.from_config(cfg, model)

    print("Starting poem generation...")
    await compose_poem(service, req, transcript=print)
    print("Poem finished.\n")


async def _list_models() -> None:
    models = await list_models(load_config())
    print("Available models:")
    if not models:
        print("  No models found. Pull or deploy one first (e.g. `ollama pull <model_name>`).")
    for name in models:
        print(f"  - {name}")


def _save_config(args: argparse.Namespace) -> None:
    path = save_poet_config(
        PoetConfig(
            model=args.model,
            title=args.title,
            seed_line=args.seed_line,
            theme=args.theme,
            style=args.style,
        )
    )
    print(f"Settings saved to {path}")


def main(argv: Sequence[str] | None = None) -> int:
    load_dotenv()
    args = build_parser().parse_args(_with_default_command(sys.argv[1:] if argv is None else argv))
    logger = setup_logger(level="DEBUG" if getattr(args, "verbose", False) else None)

    try:
        if args.command == "list-models":
            asyncio.run(_list_models())
        elif args.command == "save-config":
            _save_config(args)
        else:
            asyncio.run(_create(args))
    except KeyboardInterrupt:
        print("\nInterrupted.", file=sys.stderr)
        return 130
    except Exception as e:
        logger.debug(f"command_failed command={args.command} err={type(e).__name__}:{e}")
        print(f"\nAn error occurred: {e}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
