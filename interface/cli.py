"""Two-player terminal game.

Moves are typed as ``e2e4`` or ``e2 e4``. Other commands: ``moves e2``,
``undo``, ``redo``, ``reset``, ``random``, ``quit``.
"""

from chessrules.config import configure_logging
from chessrules.core.board import parse_square, square_name
from chessrules.core.status import GameStatus
from chessrules.errors import InvalidSquareError
from chessrules.main import Engine


def parse_move(text: str):
    text = text.replace(" ", "").replace("-", "")
    if len(text) != 4:
        raise InvalidSquareError(f"expected a move like e2e4, got {text!r}")
    return parse_square(text[:2]), parse_square(text[2:])


def status_line(engine: Engine) -> str:
    state = engine.get_state()
    if state.status is GameStatus.CHECKMATE:
        return f"Checkmate! {state.winner.value.capitalize()} wins."
    if state.status is GameStatus.STALEMATE:
        return "Stalemate! Game is a draw."
    line = f"{state.turn.value.capitalize()} to move"
    if state.status is GameStatus.CHECK:
        line += " (check)"
    return line


def run(engine: Engine = None, read=input, write=print):
    engine = engine or Engine()
    while True:
        write(engine.board_ascii())
        write(status_line(engine))
        write("----------------------------")

        command = read("> ").strip().lower()
        if command in ("quit", "exit"):
            break
        if command == "undo":
            if not engine.undo():
                write("Nothing to undo.")
            continue
        if command == "redo":
            if not engine.redo():
                write("Nothing to redo.")
            continue
        if command == "reset":
            engine.reset()
            continue
        if command == "random":
            move = engine.random_move()
            if move is None:
                write("No legal moves.")
            else:
                engine.apply_move(*move)
                write(f"Played: {square_name(move[0])}{square_name(move[1])}")
            continue
        try:
            if command.startswith("moves"):
                square = parse_square(command[len("moves"):])
                targets = engine.valid_moves(square)
                write(" ".join(square_name(t) for t in targets) or "No legal moves.")
                continue
            frm, to = parse_move(command)
        except InvalidSquareError as e:
            write(str(e))
            continue
        if not engine.apply_move(frm, to):
            write("Illegal move, try again.")
    return engine


if __name__ == "__main__":
    configure_logging()
    run()
