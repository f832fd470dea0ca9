"""Answer history and missed-clue export."""
import io
import logging

import pandas as pd

logger = logging.getLogger(__name__)

EXPORT_COLUMNS = ["Category", "Value", "Question", "Correct Answer", "Your Answer"]


def make_result(clue, choice, is_correct, points):
    return {
        "id": clue.get("id"),
        "category": clue.get("category", ""),
        "value": clue.get("value"),
        "question": clue.get("question", ""),
        "answer": clue.get("answer", ""),
        "user_answer": choice,
        "correct": bool(is_correct),
        "points": points,
    }


def missed_results(history):
    return [r for r in history if not r.get("correct")]


def export_missed_clues(history):
    """Export missed clues to Excel bytes. Returns None when nothing was missed or writing fails."""
    missed = missed_results(history)
    if not missed:
        return None
    data = []
    for r in missed:
        data.append({
            "Category": r.get("category", ""),
            "Value": r.get("value"),
            "Question": r.get("question", ""),
            "Correct Answer": r.get("answer", ""),
            "Your Answer": r.get("user_answer", ""),
        })
    df = pd.DataFrame(data, columns=EXPORT_COLUMNS)
    out = io.BytesIO()
    try:
        with pd.ExcelWriter(out, engine='xlsxwriter') as writer:
            df.to_excel(writer, index=False)
        return out.getvalue()
    except (ImportError, ValueError, OSError):
        logger.exception("Excel export failed")
        return None
