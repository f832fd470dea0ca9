"""Core parsing, board building and answer matching utilities for the trivia board."""
import logging
import random
import re

logger = logging.getLogger(__name__)

VALUE_LEVELS = (200, 400, 600, 800, 1000)
ROUND_NAME = "Jeopardy!"
BOARD_SIZE = 6
CHOICE_COUNT = 4
MAX_DISTRACTOR_CANDIDATES = 20

# --- Regex Patterns for Answer Normalization ---
RE_TAG = re.compile(r'<[^>]*>')
RE_QUOTES = re.compile(r'["\'`‘’“”]')
RE_ARTICLES = re.compile(r'\b(a|an|the)\b')
RE_NON_ALNUM = re.compile(r'[^a-z0-9]')
RE_SPACES = re.compile(r'\s+')
# Plain integer once "$" and "," are gone
RE_INT = re.compile(r'\s*[+-]?\d+\s*')


def parse_csv(text):
    """Parse delimited text into rows of fields, honoring quotes and doubled-quote escapes."""
    rows = []
    if not text:
        return rows

    row = []
    field = []
    in_quotes = False
    i = 0
    n = len(text)
    while i < n:
        char = text[i]
        if in_quotes:
            if char == '"' and i + 1 < n and text[i + 1] == '"':
                field.append('"')
                i += 1
            elif char == '"':
                in_quotes = False
            else:
                field.append(char)
        elif char == '"':
            in_quotes = True
        elif char == ',':
            row.append(''.join(field))
            field = []
        elif char == '\n':
            row.append(''.join(field))
            rows.append(row)
            row = []
            field = []
        elif char != '\r':
            field.append(char)
        i += 1

    # No trailing newline (or an unterminated quote): flush what is left
    if field or row:
        row.append(''.join(field))
        rows.append(row)
    return rows


def normalize_value(value):
    """Convert a value like "$1,000" to an int. Returns None when it does not parse."""
    if not value:
        return None
    cleaned = re.sub(r'[$,]', '', str(value))
    if not RE_INT.fullmatch(cleaned):
        return None
    return int(cleaned)


def format_value(value):
    return f"${value}" if value else "-"


def column_index(header):
    """Map trimmed column names to their position in the header row."""
    return {str(name).strip(): idx for idx, name in enumerate(header)}


def extract_clues(rows):
    """Turn raw rows into clue dicts using the first row as header. Unknown columns read as None."""
    if not rows:
        return []
    header, data = rows[0], rows[1:]
    cols = column_index(header)

    def cell(row, name):
        idx = cols.get(name)
        if idx is None or idx >= len(row):
            return None
        return row[idx]

    clues = []
    for row in data:
        clues.append({
            "category": cell(row, "Category"),
            "value": normalize_value(cell(row, "Value")),
            "question": cell(row, "Question"),
            "answer": cell(row, "Answer"),
            "round": cell(row, "Round"),
        })
    return clues


def build_clue_list(rows):
    """All clues usable as answer sources: category, question and answer present."""
    return [c for c in extract_clues(rows)
            if c["category"] and c["question"] and c["answer"]]


def build_board_clues(rows, round_name=ROUND_NAME):
    """Clues that may appear on the board: target round with a usable value."""
    return [c for c in extract_clues(rows)
            if c["round"] == round_name and c["category"] and c["value"]
            and c["question"] and c["answer"]]


def shuffle(items, rng=None):
    """Return a uniformly shuffled copy of items."""
    rng = rng or random
    copy = list(items)
    rng.shuffle(copy)
    return copy


def group_by_category(clues):
    groups = {}
    for clue in clues:
        groups.setdefault(clue["category"], []).append(clue)
    return groups


def is_eligible(items, levels=VALUE_LEVELS):
    """True when the category has at least one clue for every value on the ladder."""
    values = {item["value"] for item in items}
    return all(level in values for level in levels)


def build_board(clues, rng=None, size=BOARD_SIZE):
    """Pick up to `size` random categories covering the full value ladder.

    Each returned category holds one clue per ladder value, ascending, tagged with
    a board-unique id "<category>|<value>". A short list means not enough
    categories were eligible; callers surface that themselves.
    """
    groups = group_by_category(clues)
    eligible = [(name, items) for name, items in groups.items() if is_eligible(items)]
    chosen = shuffle(eligible, rng)[:size]

    board = []
    for name, items in chosen:
        by_value = {}
        for item in items:
            if item["value"] in VALUE_LEVELS and item["value"] not in by_value:
                by_value[item["value"]] = item
        board.append({
            "name": name,
            "clues": [dict(by_value.get(value, {}), id=f"{name}|{value}") for value in VALUE_LEVELS],
        })

    if len(board) < size:
        logger.warning("Only %d of %d categories eligible for the board", len(board), size)
    return board


def build_game(rows, rng=None):
    return build_board(build_board_clues(rows), rng=rng)


def normalize_answer(text):
    """Canonical answer form for comparison: no case, markup, quotes, articles or punctuation."""
    if text is None:
        return ""
    text = str(text).lower()
    text = RE_TAG.sub('', text)
    text = RE_QUOTES.sub('', text)
    text = RE_ARTICLES.sub('', text)
    text = RE_NON_ALNUM.sub(' ', text)
    return RE_SPACES.sub(' ', text).strip()


def answers_match(given, expected):
    return normalize_answer(given) == normalize_answer(expected)


def _unique_answers(pool, exclude, limit=MAX_DISTRACTOR_CANDIDATES):
    """First display text per canonical answer, skipping `exclude` and blanks."""
    unique = {}
    for clue in pool:
        normalized = normalize_answer(clue["answer"])
        if not normalized or normalized == exclude:
            continue
        if normalized not in unique:
            unique[normalized] = clue["answer"]
            if limit and len(unique) >= limit:
                break
    return unique


def build_choices(correct_clue, clues, rng=None):
    """Return the correct answer plus up to three distractors, shuffled.

    Distractors come from the same category when it offers at least three
    distinct answers, otherwise from every clue in the repository.
    """
    normalized_correct = normalize_answer(correct_clue["answer"])
    same_category = [c for c in clues if c["category"] == correct_clue["category"]]
    unique = _unique_answers(same_category, normalized_correct)
    if len(unique) < CHOICE_COUNT - 1:
        unique = _unique_answers(clues, normalized_correct)

    distractors = shuffle(unique.values(), rng)[:CHOICE_COUNT - 1]
    if len(distractors) < CHOICE_COUNT - 1:
        logger.debug("Only %d distractors for %r", len(distractors), correct_clue.get("id"))
    return shuffle([correct_clue["answer"]] + distractors, rng)


def check_answer(choice, clue):
    """Score a chosen answer. Returns (is_correct, points); (None, 0) when nothing was chosen."""
    if not normalize_answer(choice):
        return None, 0
    value = clue.get("value") or 0
    is_correct = answers_match(choice, clue["answer"])
    return is_correct, (value if is_correct else -value)
