import logging
import os

import streamlit as st

from game_data import load_dataset, board_warning
from review import make_result, missed_results, export_missed_clues
from trivia_utils import check_answer, format_value

logging.basicConfig(
    level=os.getenv("TRIVIA_LOG_LEVEL", "INFO").upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger("trivia_board")

# --- 1. Page config ---
st.set_page_config(
    page_title="Jeopardy! Trivia Challenge",
    layout="wide",
    page_icon="🎲",
    initial_sidebar_state="expanded"
)

# --- 2. CSS ---
st.markdown("""
<style>
    #MainMenu {visibility: hidden;}
    footer {visibility: hidden;}
    [data-testid="stHeader"] {
        background-color: rgba(0,0,0,0);
    }

    .stApp { background-color: #060b2e; color: #FFFFFF; }

    [data-testid="stSidebar"] {
        background-color: #0b1240;
        border-right: 1px solid #1f2a6b;
    }
    [data-testid="stSidebar"] [data-testid="stMarkdownContainer"] p,
    [data-testid="stSidebar"] h2, [data-testid="stSidebar"] h3 {
        color: #FFFFFF !important;
    }

    /* Hero */
    .hero {
        display: flex;
        justify-content: space-between;
        align-items: center;
        background: linear-gradient(135deg, #0a1a8f 0%, #060d5c 100%);
        padding: 20px 28px;
        border-radius: 16px;
        border: 1px solid #2336b8;
        margin-bottom: 24px;
        box-shadow: 0 4px 20px rgba(0, 0, 0, 0.4);
    }
    .hero-badge {
        display: inline-block;
        padding: 4px 12px;
        background: #f5c518;
        color: #060b2e;
        border-radius: 20px;
        font-size: 12px;
        font-weight: bold;
    }
    .hero-title { font-size: 40px; font-weight: 800; color: #FFFFFF; margin: 6px 0 0 0; }
    .hero-subtitle { color: #c9d2ff; font-size: 16px; margin: 0; }
    .score-label { color: #a0a8d0; font-size: 14px; font-weight: 600; }
    .score-value { font-size: 32px; font-weight: 800; color: #f5c518; margin-left: 8px; }
    .score-negative { color: #ff6b6b !important; }

    /* Board */
    .category {
        background: #0a1a8f;
        color: #FFFFFF;
        text-transform: uppercase;
        font-weight: 800;
        text-align: center;
        padding: 14px 8px;
        min-height: 80px;
        border-radius: 10px;
        margin-bottom: 10px;
        display: flex;
        align-items: center;
        justify-content: center;
    }
    .stButton > button {
        background: #0a1a8f !important;
        color: #f5c518 !important;
        font-size: 22px;
        font-weight: 800;
        border-radius: 10px;
        border: 1px solid #2336b8 !important;
        height: 64px;
    }
    .stButton > button:disabled {
        background: #0b1030 !important;
        color: #3a4270 !important;
    }
    button[kind="primary"] {
        background: linear-gradient(135deg, #f5c518 0%, #e0a800 100%) !important;
        color: #060b2e !important;
        height: 50px;
    }

    /* Clue card */
    .clue-card {
        background: linear-gradient(145deg, #0a1a8f 0%, #060d5c 100%);
        padding: 30px;
        border-radius: 20px;
        border: 1px solid #2336b8;
        margin: 24px 0;
        box-shadow: 0 8px 32px rgba(0, 0, 0, 0.4);
    }
    .clue-header { display: flex; justify-content: space-between; color: #c9d2ff; font-weight: 700; margin-bottom: 18px; }
    .question-text { font-size: 24px; font-weight: 600; color: #FFFFFF; line-height: 1.6; text-transform: uppercase; }
    .answer-text { font-size: 20px; color: #f5c518; margin-top: 18px; }

    .feedback-box {
        padding: 16px;
        border-radius: 12px;
        margin: 16px 0;
        font-weight: bold;
        text-align: center;
        font-size: 18px;
    }
    .feedback-success { background: #0d4d0d; color: #4ade80; border: 1px solid #22c55e; }
    .feedback-error { background: #4d0d0d; color: #f87171; border: 1px solid #ef4444; }
</style>
""", unsafe_allow_html=True)


# --- 3. Game state ---
def reset_round():
    st.session_state.selected = None
    st.session_state.revealed = False
    st.session_state.choices = []
    st.session_state.answer_result = None


def start_new_game():
    data = st.session_state.game_data
    if not data:
        return
    board = data.new_game()
    st.session_state.board = board
    st.session_state.answered = {}
    st.session_state.score = 0
    st.session_state.history = []
    st.session_state.error = board_warning(board)
    logger.info("New game with %d categories", len(board))
    reset_round()


def use_dataset(data, err):
    st.session_state.error = err
    if err:
        return False
    st.session_state.game_data = data
    start_new_game()
    return True


def open_clue(clue):
    if not clue or not clue.get("question"):
        return
    if st.session_state.answered.get(clue["id"]):
        return
    reset_round()
    st.session_state.selected = clue
    st.session_state.open_no += 1
    st.session_state.choices = st.session_state.game_data.choices_for(clue)


def lock_in(choice):
    clue = st.session_state.selected
    if not clue or st.session_state.answered.get(clue["id"]):
        return False
    is_correct, points = check_answer(choice, clue)
    if is_correct is None:
        st.toast("Pick an answer to check.", icon="⚠️")
        return False
    st.session_state.answer_result = is_correct
    st.session_state.answered[clue["id"]] = True
    st.session_state.score += points
    st.session_state.history.append(make_result(clue, choice, is_correct, points))
    return True


if 'init' not in st.session_state:
    st.session_state.game_data = None
    st.session_state.board = []
    st.session_state.answered = {}
    st.session_state.score = 0
    st.session_state.history = []
    st.session_state.open_no = 0
    reset_round()
    use_dataset(*load_dataset())
    st.session_state.init = True

# --- 4. Sidebar ---
with st.sidebar:
    st.header("🛠️ Controls")
    if st.button("Start Game!", type="primary", use_container_width=True,
                 disabled=not st.session_state.game_data):
        start_new_game()
        st.rerun()

    data = st.session_state.game_data
    if data:
        st.caption(f"{len(data.clues)} clues · {len(data.board_clues)} board-eligible")

    missed = missed_results(st.session_state.history)
    if missed:
        st.divider()
        st.subheader(f"📥 Missed ({len(missed)})")
        xls = export_missed_clues(st.session_state.history)
        if xls:
            st.download_button("Export", xls, "missed_clues.xlsx", use_container_width=True)

    st.divider()
    with st.expander("➕ Load dataset", expanded=not data):
        f = st.file_uploader("CSV", type=['csv'])
        if f and st.button("Load", type="primary"):
            with st.spinner("Parsing..."):
                loaded, err = load_dataset(f)
            if use_dataset(loaded, err):
                st.success(f"Loaded {len(loaded.clues)} clues")
            st.rerun()

# --- 5. Main view ---
score = st.session_state.score
st.markdown(f"""
<div class="hero">
    <div>
        <span class="hero-badge">Game Show</span>
        <p class="hero-title">Jeopardy!</p>
        <p class="hero-subtitle">Trivia Challenge · pick a dollar value to open a clue</p>
    </div>
    <div><span class="score-label">Score</span>
        <span class="score-value {'score-negative' if score < 0 else ''}">{score}</span></div>
</div>
""", unsafe_allow_html=True)

if st.session_state.error:
    if st.session_state.board:
        st.warning(st.session_state.error)
    else:
        st.error(st.session_state.error)

board = st.session_state.board
if board:
    cols = st.columns(len(board))
    for col, category in zip(cols, board):
        with col:
            st.markdown(f'<div class="category">{category["name"]}</div>', unsafe_allow_html=True)
            for clue in category["clues"]:
                used = bool(st.session_state.answered.get(clue["id"]))
                if st.button(format_value(clue.get("value")), key=f"clue_{clue['id']}",
                             disabled=used, use_container_width=True):
                    open_clue(clue)
                    st.rerun()
elif st.session_state.game_data is None:
    st.info("Load a dataset from the sidebar to start playing.")

selected = st.session_state.selected
if selected:
    answered = bool(st.session_state.answered.get(selected["id"]))
    answer_html = f'<div class="answer-text">{selected["answer"]}</div>' if st.session_state.revealed else ''
    st.markdown(f"""
    <div class="clue-card">
        <div class="clue-header"><span>{selected['category']}</span><span>{format_value(selected.get('value'))}</span></div>
        <div class="question-text">{selected['question']}</div>
        {answer_html}
    </div>
    """, unsafe_allow_html=True)

    choice = st.radio("Choose Your Answer", st.session_state.choices, index=None,
                      key=f"choice_{st.session_state.open_no}", disabled=answered)

    result = st.session_state.answer_result
    if result is True:
        st.markdown('<div class="feedback-box feedback-success">✅ Correct!</div>', unsafe_allow_html=True)
    elif result is False:
        st.markdown('<div class="feedback-box feedback-error">❌ Not quite.</div>', unsafe_allow_html=True)

    c1, c2, c3 = st.columns(3)
    if c1.button("Hide Answer" if st.session_state.revealed else "Reveal Answer", use_container_width=True):
        st.session_state.revealed = not st.session_state.revealed
        st.rerun()
    if c2.button("Lock In Answer", disabled=answered, use_container_width=True):
        if lock_in(choice):
            st.rerun()
    if c3.button("Close", use_container_width=True):
        reset_round()
        st.rerun()
