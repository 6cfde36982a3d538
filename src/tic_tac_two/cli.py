"""
Command-line interface for managing and playing saved games.
"""

import argparse
import logging
import sys
from typing import List, Optional

from tic_tac_two.core.errors import GameError
from tic_tac_two.games import Move, TicTacTwo
from tic_tac_two.session import SessionStore, open_store
from tic_tac_two.utils.config import Config, LOG_LEVELS, SESSION_DB

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="tic-tac-two",
        description="Play Tic-Tac-Two and manage saved sessions",
    )
    parser.add_argument(
        "--db",
        default=str(SESSION_DB),
        help=f"Session database path (default: {SESSION_DB})",
    )
    parser.add_argument(
        "--log-level",
        choices=LOG_LEVELS,
        default="WARNING",
        help="Logging verbosity (default: WARNING)",
    )
    parser.add_argument(
        "--slide-threshold",
        type=int,
        default=None,
        help="Turns before window slides unlock (default: 4)",
    )

    sub = parser.add_subparsers(dest="command", required=True)
    sub.add_parser("list", help="List saved sessions")

    show = sub.add_parser("show", help="Print a saved board")
    show.add_argument("name")

    delete = sub.add_parser("delete", help="Delete a saved session")
    delete.add_argument("name")

    new = sub.add_parser("new", help="Start (or reset) a session")
    new.add_argument("name")

    play = sub.add_parser(
        "play",
        help="Apply moves to a session: p:<i>, r:<from>-<to>, s:<direction>",
    )
    play.add_argument("name")
    play.add_argument("moves", nargs="+")

    return parser


def _load_game(store: SessionStore, name: str, config: Config) -> TicTacTwo:
    game = TicTacTwo(slide_threshold=config.slide_threshold)
    if name in store:
        game.set_state(store.load(name))
    return game


def _print_game(game: TicTacTwo) -> None:
    print(game.state_string())
    if game.is_over():
        print(f"{game.get_cell_strings()[game.winner]} wins!")


def run(args: argparse.Namespace, store: SessionStore, config: Config) -> int:
    if args.command == "list":
        names = store.list_sessions()
        if not names:
            print("No saved sessions yet.")
        for name in names:
            print(name)
        return 0

    if args.command == "show":
        game = TicTacTwo(slide_threshold=config.slide_threshold)
        game.set_state(store.load(args.name))
        _print_game(game)
        return 0

    if args.command == "delete":
        store.delete(args.name)
        return 0

    if args.command == "new":
        game = TicTacTwo(slide_threshold=config.slide_threshold)
        store.save(args.name, game.get_state())
        _print_game(game)
        return 0

    if args.command == "play":
        game = _load_game(store, args.name, config)
        moves = [Move.parse(m) for m in args.moves]
        for move in moves:
            # Keep the moves that succeeded even if a later one is illegal
            try:
                game.apply_move(move)
            except GameError:
                store.save(args.name, game.get_state())
                raise
        store.save(args.name, game.get_state())
        _print_game(game)
        return 0

    raise ValueError(f"Unknown command: {args.command}")


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    config_kwargs = {"db_path": args.db, "log_level": args.log_level}
    if args.slide_threshold is not None:
        config_kwargs["slide_threshold"] = args.slide_threshold

    try:
        config = Config(**config_kwargs)
    except ValueError as e:
        print(f"error: {e}", file=sys.stderr)
        return 1

    logging.basicConfig(
        level=config.log_level_value,
        format="%(levelname)s %(name)s: %(message)s",
    )

    with open_store(config.db_path) as store:
        try:
            return run(args, store, config)
        except KeyError as e:
            print(f"error: no session named {e}", file=sys.stderr)
        except (GameError, ValueError) as e:
            print(f"error: {e}", file=sys.stderr)
    return 1


if __name__ == "__main__":
    sys.exit(main())
