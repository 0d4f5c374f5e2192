import asyncio

import streamlit as st
from dotenv import load_dotenv

from core.config import load_config
from core.logging_setup import setup_logger
from core.llm_service import ChatModelService, NoModelsAvailableError, find_best_model
from core.orchestrator import list_models, run_poem
from core.poet_config import load_bio, load_poet_config, merge_request

# -------------------------------------------------------------------
# Setup
# -------------------------------------------------------------------

load_dotenv()
logger = setup_logger()

st.set_page_config(page_title="Iterative Poet", page_icon="📜", layout="wide")
st.title("Iterative Poet")
st.caption("A poem, one line at a time")

SUGGESTED_THEMES = [
    "Random", "Nature", "Love", "Technology", "Existentialism", "Urban Life",
    "Dreams", "Loss", "Hope", "Adventure", "Solitude", "Time", "Memory",
]
SUGGESTED_STYLES = [
    "Free Verse", "Haiku", "Sonnet", "Limerick", "Blank Verse",
    "Ode", "Elegy", "Ballad", "Sestina", "Acrostic", "Hip-Hop",
]
CUSTOM = "Custom…"

# -------------------------------------------------------------------
# Config
# -------------------------------------------------------------------

try:
    cfg = load_config()
except Exception as e:
    st.error(str(e))
    st.stop()

saved = load_poet_config()
user_bio = load_bio()

st.session_state.setdefault("poems", [])


@st.cache_data(ttl=60)
def _available_models():
    return asyncio.run(list_models(cfg))


try:
    models = _available_models()
except Exception as e:
    logger.error(f"list_models_failed err={type(e).__name__}:{e}")
    models = []


def _index_of(options, value, fallback=0):
    if value and value in options:
        return options.index(value)
    return fallback


# -------------------------------------------------------------------
# Sidebar: model & persona
# -------------------------------------------------------------------

with st.sidebar:
    st.subheader("Model")
    if models:
        default_model = (saved.model if saved else None) or cfg.model
        if not default_model:
            try:
                default_model = find_best_model(models)
            except NoModelsAvailableError:
                default_model = None
        model = st.selectbox("Model", models, index=_index_of(models, default_model))
    else:
        model = st.text_input("Model", value=(saved.model if saved else None) or cfg.model or "")
        st.caption("Could not list models from the backend; type a model name.")

    st.divider()
    st.subheader("Persona")
    if user_bio:
        st.caption("Loaded from ~/.me.toon")
        st.code(user_bio)
    else:
        st.caption("No ~/.me.toon found. The poem is written without a persona.")

# -------------------------------------------------------------------
# Write
# -------------------------------------------------------------------

title = st.text_input(
    "Title (leave empty for a generated one)", value=(saved.title if saved else None) or ""
)
seed_line = st.text_input(
    "Seed line (leave empty for a generated one)",
    value=(saved.seed_line if saved else None) or "",
)

c1, c2 = st.columns(2)
with c1:
    theme = st.selectbox(
        "Theme",
        SUGGESTED_THEMES + [CUSTOM],
        index=_index_of(SUGGESTED_THEMES, saved.theme if saved else None, 1),
    )
    if theme == CUSTOM:
        theme = st.text_input("Custom theme")
with c2:
    style = st.selectbox(
        "Style",
        SUGGESTED_STYLES + [CUSTOM],
        index=_index_of(SUGGESTED_STYLES, saved.style if saved else None),
    )
    if style == CUSTOM:
        style = st.text_input("Custom style")

guidance = st.text_area(
    "Guidance (optional)",
    height=100,
    help='Takes priority over theme and style. "8 lines long" sets the length.',
)

if st.button("Compose", disabled=not model):
    req = merge_request(
        {"title": title, "seed_line": seed_line, "theme": theme, "style": style},
        user_bio=user_bio,
        guidance=guidance,
    )
    service = ChatModelService.from_config(cfg, model)

    placeholder = st.empty()
    shown = []

    def _show(text: str) -> None:
        shown.append(text)
        placeholder.markdown("  \n".join(shown))

    with st.spinner("Writing…"):
        out = run_poem(service, req, transcript=_show)

    if out.ok:
        placeholder.empty()
        st.session_state["poems"].append(out.poem)
    else:
        st.error(out.error_user)

for poem in reversed(st.session_state["poems"]):
    st.markdown(f"### {poem.title}")
    st.markdown("  \n".join(poem.lines))
    st.divider()
