"""GenreSky — Streamlit app showing movie genres as star clusters.

    streamlit run src/genresky/app.py
"""

import html
import io
from dataclasses import replace

import streamlit as st
from dotenv import load_dotenv

load_dotenv()

from genresky.config import ConfigError, data_path, load_config  # noqa: E402
from genresky.i18n import t  # noqa: E402
from genresky.ingest import MovieDataError, load_genres  # noqa: E402
from genresky.models import Genre, SceneState  # noqa: E402
from genresky.renderers.plotly_2d import render_plotly_chart  # noqa: E402
from genresky.scene import detail_lines, handle_click  # noqa: E402

_config_error: str | None = None
try:
    _config = load_config()
except ConfigError as e:
    _config = load_config(environ={})
    _config_error = str(e)

_lang = _config.lang

st.set_page_config(
    page_title=t("page_title", _lang),
    page_icon="✦",
    layout="wide",
    initial_sidebar_state="expanded",
)

if _config_error:
    st.error(_config_error)
    st.stop()

# --- Session state initialization ---

if "scene_state" not in st.session_state:
    st.session_state.scene_state = SceneState()

# --- Dark theme CSS ---
st.markdown(
    """
    <style>
    html, body, [data-testid="stAppViewContainer"], [data-testid="stMain"] {
        background-color: #0d1b35 !important;
    }
    [data-testid="stHeader"], [data-testid="stToolbar"] {
        display: none !important;
    }
    [data-testid="stSidebar"] {
        background-color: #0a1529 !important;
    }
    label, [data-testid="stWidgetLabel"] p {
        color: #aaaaaa !important;
        font-size: 0.85rem !important;
    }
    .overlay-box {
        background: rgba(18, 16, 14, 0.7);
        border-top: 1px solid rgba(201,169,110,0.18);
        border-radius: 8px;
        padding: 1rem 1.4rem;
        color: #ebe6dc;
        line-height: 1.7;
        margin-bottom: 0.5rem;
    }
    .summary-text { color: #7ec8e3; font-size: 0.9rem; }
    </style>
    """,
    unsafe_allow_html=True,
)


@st.cache_data(show_spinner=False)
def _load_path(path: str) -> list[Genre]:
    return list(load_genres(path).values())


@st.cache_data(show_spinner=False)
def _load_upload(data: bytes) -> list[Genre]:
    return list(load_genres(io.BytesIO(data)).values())


# --- Sidebar: data source + layout ---

with st.sidebar:
    uploaded = st.file_uploader(t("label_upload", _lang), type=["csv"])
    mode = st.radio(
        t("label_mode", _lang),
        options=["grid", "simple"],
        index=0 if _config.mode == "grid" else 1,
        horizontal=True,
    )
config = replace(_config, mode=mode)

if uploaded is not None:
    try:
        genres = _load_upload(uploaded.getvalue())
    except MovieDataError as e:
        st.error(str(e))
        st.stop()
elif data_path():
    try:
        genres = _load_path(str(data_path()))
    except (FileNotFoundError, MovieDataError) as e:
        st.error(str(e))
        st.stop()
else:
    st.markdown(
        f"<div style='height:60vh; display:flex; align-items:center; justify-content:center;"
        f" color:#334466; font-size:1.2rem;'>{t('placeholder', _lang)}</div>",
        unsafe_allow_html=True,
    )
    st.stop()

movie_count = len({id(m) for g in genres for m in g.movies})
st.markdown(
    f"<div class='summary-text'>{t('summary', _lang).format(movies=movie_count, genres=len(genres))}"
    f" · {t('hint_select', _lang)}</div>",
    unsafe_allow_html=True,
)

# --- Chart ---
# render_plotly_chart refreshes every star cache, so the selection below is
# hit-tested against exactly the positions on screen.
fig = render_plotly_chart(genres, config)
event = st.plotly_chart(
    fig,
    key=f"chart_{config.mode}",
    on_select="rerun",
    selection_mode="points",
    use_container_width=False,
    config={"displayModeBar": False},
)

state: SceneState = st.session_state.scene_state
points = event["selection"]["points"] if event else []
if points:
    point = points[-1]
    handle_click(state, genres, float(point["x"]), float(point["y"]))
else:
    state.selected = None

# --- Selection overlay ---
if state.selected is not None:
    body = "<br>".join(html.escape(line) for line in detail_lines(state.selected, _lang))
    st.sidebar.markdown(f"<div class='overlay-box'>{body}</div>", unsafe_allow_html=True)
else:
    st.sidebar.markdown(
        f"<div class='overlay-box'>{t('no_selection', _lang)}</div>", unsafe_allow_html=True
    )
