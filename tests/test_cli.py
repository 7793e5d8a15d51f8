import chess
import pytest

from minimax_bot.cli import main

MATE_IN_ONE = '6k1/5ppp/8/8/8/8/8/R5K1 w - - 0 1'
STALEMATE = '7k/5Q2/6K1/8/8/8/8/8 b - - 0 1'


def test_decide_prints_move(capsys):
    assert main(['decide', '--fen', MATE_IN_ONE, '--level', '1']) == 0
    out = capsys.readouterr().out
    assert 'move: a1a8' in out
    assert 'nodes: 1' in out


def test_decide_without_moves(capsys):
    assert main(['decide', '--fen', STALEMATE]) == 1
    assert 'move: none' in capsys.readouterr().out


def test_actions_lists_legal_moves(capsys):
    assert main(['actions']) == 0
    lines = capsys.readouterr().out.split()
    assert len(lines) == 20
    assert 'e2e4' in lines


def test_evaluate_start_position(capsys):
    assert main(['evaluate', '--color', 'black']) == 0
    assert float(capsys.readouterr().out) == 0


def test_invalid_input_exit_status(capsys):
    assert main(['decide', '--fen', 'garbage']) == 2
    assert 'error' in capsys.readouterr().err
    assert main(['decide', '--fen', chess.STARTING_FEN, '--level', '9']) == 2


BLACK_MATE_IN_ONE = 'r5k1/8/8/8/8/8/5PPP/6K1 b - - 0 1'
BARE_KINGS = '8/8/8/4k3/8/8/8/4K3 w - - 0 1'


def test_decide_is_for_side_to_move(capsys):
    assert main(['decide', '--fen', BLACK_MATE_IN_ONE, '--level', '1']) == 0
    assert 'move: a8a1' in capsys.readouterr().out


def test_decide_rejects_color(capsys):
    with pytest.raises(SystemExit) as exc:
        main(['decide', '--fen', MATE_IN_ONE, '--color', 'black'])
    assert exc.value.code == 2


def test_result_applies_move(capsys):
    assert main(['result', '--move', 'e2e4']) == 0
    assert capsys.readouterr().out.strip() == 'rnbqkbnr/pppppppp/8/8/4P3/8/PPPP1PPP/RNBQKBNR b KQkq - 0 1'


def test_result_with_promotion(capsys):
    assert main(['result', '--fen', '8/4P2k/8/8/8/8/8/4K3 w - - 0 1', '--move', 'e7e8q']) == 0
    assert capsys.readouterr().out.strip() == '4Q3/7k/8/8/8/8/8/4K3 b - - 0 1'


@pytest.mark.parametrize('move', ['e2e5', 'xyz'])
def test_result_rejects_bad_move(capsys, move):
    assert main(['result', '--move', move]) == 2
    assert 'error' in capsys.readouterr().err


def test_actions_empty_when_game_is_over(capsys):
    # Bare kings: legal moves exist but the game is drawn
    assert main(['actions', '--fen', BARE_KINGS]) == 0
    assert capsys.readouterr().out == ''
    assert main(['decide', '--fen', BARE_KINGS]) == 1
