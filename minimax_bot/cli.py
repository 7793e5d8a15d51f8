import argparse
import logging
import sys

import chess

from minimax_bot.chess_game import DEFAULT_LEVEL, MAX_LEVEL, ChessGame, ChessState
from minimax_bot.engine import MinimaxEngine

logger = logging.getLogger(__name__)

COLORS = {'white': chess.WHITE, 'black': chess.BLACK}


def setup_logging(level: str):
    numeric = getattr(logging, level.upper(), None)
    if not isinstance(numeric, int):
        numeric = logging.INFO
    logging.basicConfig(level=numeric, format='%(asctime)s %(levelname)s %(name)s: %(message)s')


def build_parser():
    parser = argparse.ArgumentParser(prog='minimax-bot', description='Minimax decisions for chess positions')
    parser.add_argument('--log-level', default='WARNING', help='logging level (DEBUG, INFO, WARNING)')
    sub = parser.add_subparsers(dest='command', required=True)

    decide = sub.add_parser('decide', help='choose a move for the side to move')
    decide.add_argument('--level', type=int, default=DEFAULT_LEVEL, help=f'intelligence level, 1-{MAX_LEVEL}')
    actions = sub.add_parser('actions', help='list legal moves in UCI')
    result = sub.add_parser('result', help='apply a move and print the next position')
    result.add_argument('--move', required=True, help='move in UCI, promotion piece included (e.g. e7e8q)')
    evaluate = sub.add_parser('evaluate', help='print the heuristic evaluation')
    evaluate.add_argument('--color', choices=sorted(COLORS), help='side to score for (default: side to move)')

    for p in (decide, actions, result, evaluate):
        p.add_argument('--fen', default=chess.STARTING_FEN, help='position in FEN (default: start position)')
    return parser


def _game_for(state: ChessState, args) -> ChessGame:
    # decide always plays for the side to move
    color = state.board().turn
    if getattr(args, 'color', None):
        color = COLORS[args.color]
    return ChessGame(color=color, level=getattr(args, 'level', DEFAULT_LEVEL))


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)
    setup_logging(args.log_level)

    try:
        state = ChessState.from_fen(args.fen)
        game = _game_for(state, args)
        if args.command == 'result':
            move = game.parse_action(state, args.move)
    except ValueError as e:
        print(f'error: {e}', file=sys.stderr)
        return 2

    if args.command == 'actions':
        for move in game.actions(state):
            print(move.uci())
        return 0
    if args.command == 'result':
        print(game.result(state, move).fen)
        return 0
    if args.command == 'evaluate':
        print(game.evaluate(state))
        return 0

    logger.info('Deciding for %s at level %d: %s', chess.COLOR_NAMES[game.color], game.level, state.fen)
    record = MinimaxEngine(game).decide(state)
    print(f'move: {record.action.uci() if record.action is not None else "none"}')
    print(f'value: {record.value}')
    print(f'nodes: {record.nodes_expanded}')
    print(f'elapsed: {record.elapsed.total_seconds():.3f}s')
    return 0 if record.action is not None else 1


if __name__ == '__main__':
    sys.exit(main())
