"""Dataset loading and the per-session clue snapshot."""
import logging
import os
from pathlib import Path

from trivia_utils import (BOARD_SIZE, build_board, build_board_clues, build_choices,
                          build_clue_list, parse_csv)

logger = logging.getLogger(__name__)

DATA_DIR = Path(os.getenv("TRIVIA_DATA_DIR", Path(__file__).resolve().parent / "data"))
DATA_FILE = os.getenv("TRIVIA_DATA_FILE", "JEOPARDY_CSV.csv")
DATA_PATH = DATA_DIR / DATA_FILE

LOAD_ERROR = "Failed to load CSV data."
EMPTY_ERROR = "The CSV file has no clues."
SHORT_BOARD_WARNING = "Not enough categories to build a full board."


class GameData:
    """Everything derived from one loaded dataset.

    A new dataset means a new GameData; instances are never updated in place.
    """

    def __init__(self, rows, source=None):
        self.rows = rows
        self.source = source
        self.clues = build_clue_list(rows)
        self.board_clues = build_board_clues(rows)

    def new_game(self, rng=None):
        return build_board(self.board_clues, rng=rng)

    def choices_for(self, clue, rng=None):
        return build_choices(clue, self.clues, rng=rng)

    def __repr__(self):
        return f"GameData(source={self.source!r}, clues={len(self.clues)}, board_clues={len(self.board_clues)})"


def read_dataset(source):
    """Read dataset text from a path or a file-like object (e.g. a Streamlit upload)."""
    if hasattr(source, "read"):
        raw = source.read()
    else:
        raw = Path(source).read_bytes()
    if isinstance(raw, bytes):
        return raw.decode("utf-8-sig")
    return str(raw)


def load_dataset(source=None):
    """Load and parse a dataset. Returns (game_data, error_message)."""
    source = DATA_PATH if source is None else source
    name = getattr(source, "name", str(source))
    try:
        text = read_dataset(source)
    except (OSError, UnicodeDecodeError):
        logger.exception("Could not read dataset %s", name)
        return None, LOAD_ERROR

    rows = parse_csv(text)
    data = GameData(rows, source=name)
    if not data.clues:
        logger.warning("Dataset %s parsed to %d rows but no usable clues", name, len(rows))
        return None, EMPTY_ERROR

    logger.info("Loaded %s: %d clues, %d board-eligible", name, len(data.clues), len(data.board_clues))
    return data, None


def board_warning(board):
    if len(board) < BOARD_SIZE:
        return SHORT_BOARD_WARNING
    return None
