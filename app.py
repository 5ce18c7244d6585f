# app.py - Tech Stack Advisor: idea + goal in, opinionated stack report out
import html
import logging
import os
from datetime import datetime

import streamlit as st

from controller import Failed, Loading, RecommendationController, Success
from report import build_report, to_markdown
from schema import DEFAULT_GOAL, OPTIMIZATION_GOALS

logging.basicConfig(
    level=os.getenv("LOG_LEVEL", "INFO").upper(),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)

# =========================
# Page configuration & Theme
# =========================
st.set_page_config(
    page_title="Tech Stack Advisor",
    page_icon="⚡",
    layout="wide",
)

st.markdown(
    """
<style>
    :root {
        --primary: #10b981;
        --danger: #ef4444;
        --warning: #f59e0b;
        --muted: #64748b;
    }

    .stButton > button {
        border-radius: 8px;
        font-weight: 600;
        transition: all 0.3s ease;
    }
    .stButton > button:hover:enabled {
        transform: translateY(-2px);
        box-shadow: 0 4px 12px rgba(0,0,0,0.15);
    }

    .approach-chip {
        display: inline-block;
        padding: 0.35rem 1rem;
        border-radius: 20px;
        background: #1e293b;
        color: var(--primary);
        font-family: monospace;
        text-transform: uppercase;
        letter-spacing: 0.08em;
    }
    .tool-card {
        padding: 1.25rem;
        border-radius: 12px;
        border: 1px solid #e0e0e0;
        margin-bottom: 1rem;
        transition: transform 0.3s ease;
    }
    .tool-card:hover {
        transform: translateY(-4px);
        box-shadow: 0 4px 12px rgba(0,0,0,0.1);
        border-color: var(--primary);
    }
    .tool-card .category {
        float: right;
        font-size: 0.75rem;
        padding: 0.15rem 0.6rem;
        border-radius: 12px;
        background: #f0f2f6;
        color: var(--muted);
    }
    .avoid-item {
        padding: 0.75rem;
        border-radius: 8px;
        border: 1px solid rgba(239,68,68,0.25);
        background: rgba(239,68,68,0.06);
        margin-bottom: 0.5rem;
    }
    .mistake-quote {
        padding: 1.5rem;
        border-radius: 12px;
        border: 1px solid rgba(245,158,11,0.3);
        background: rgba(245,158,11,0.08);
        font-size: 1.1rem;
        font-style: italic;
        text-align: center;
    }
    .cut-item { color: var(--muted); text-decoration: line-through; }
</style>
""",
    unsafe_allow_html=True,
)

# =========================
# Session State
# =========================
if "advisor" not in st.session_state:
    st.session_state.advisor = RecommendationController()

ctrl: RecommendationController = st.session_state.advisor


def _on_generate():
    ctrl.update_idea_text(st.session_state.get("idea_text", ""))
    ctrl.update_goal(st.session_state.get("goal", DEFAULT_GOAL))
    ctrl.begin()


def _on_reset():
    ctrl.reset()
    st.session_state.idea_text = ""


# =========================
# Header
# =========================
st.markdown(
    """
<div style="background: linear-gradient(135deg, #059669 0%, #2563eb 100%); padding: 2rem; border-radius: 12px; margin-bottom: 2rem; text-align: center;">
  <h1 style="color: white; margin: 0;">⚡ Get Your Tech Stack</h1>
  <p style="color: rgba(255,255,255,0.9); margin-top: 0.5rem;">Describe your idea. Get an opinionated, ruthless execution plan from a senior CTO.</p>
</div>
""",
    unsafe_allow_html=True,
)

# =========================
# Input form
# =========================
_, goal_col = st.columns([3, 1])
with goal_col:
    goal = st.selectbox(
        "Primary goal:",
        OPTIMIZATION_GOALS,
        index=OPTIMIZATION_GOALS.index(DEFAULT_GOAL),
        key="goal",
        disabled=ctrl.busy,
    )

idea = st.text_area(
    "What do you want to build?",
    height=140,
    placeholder="I want to build a real-time collaborative whiteboard app for remote teams...",
    key="idea_text",
    disabled=ctrl.busy,
)
ctrl.update_goal(goal)
ctrl.update_idea_text(idea)

st.button(
    "⏳ Thinking..." if ctrl.busy else "✨ Generate →",
    key="generate",
    type="primary",
    disabled=not ctrl.can_submit,
    on_click=_on_generate,
    use_container_width=True,
)

if isinstance(ctrl.phase, Loading):
    with st.spinner("Thinking..."):
        ctrl.settle(ctrl.phase.token)
    st.rerun()

# =========================
# Results
# =========================
phase = ctrl.phase

if isinstance(phase, Failed):
    st.error(phase.message)

if isinstance(phase, Success):
    sections = {s.kind: s for s in build_report(phase.result)}

    st.divider()
    header = sections["header"]
    st.markdown(
        f'<div style="text-align: center;"><span class="approach-chip">{html.escape(header.title)}</span></div>',
        unsafe_allow_html=True,
    )
    st.markdown(f"<h2 style='text-align: center; font-weight: 300;'>{html.escape(header.body)}</h2>", unsafe_allow_html=True)

    # Main stack
    st.markdown(f"#### 🧱 {sections['stack'].title}")
    cards = sections["stack"].body
    cols = st.columns(3)
    for i, card in enumerate(cards):
        with cols[i % 3]:
            st.markdown(
                f"""
<div class="tool-card">
  <span class="category">{html.escape(card['category'])}</span>
  <h4>{card['icon'].glyph} {html.escape(card['name'])}</h4>
  <p>{html.escape(card['description'])}</p>
</div>
""",
                unsafe_allow_html=True,
            )

    # Anti-patterns & mistakes
    col1, col2 = st.columns(2)
    with col1:
        st.markdown(f"#### ❌ {sections['avoid'].title.upper()}")
        for tool, reason in sections["avoid"].body:
            st.markdown(
                f'<div class="avoid-item">🚫 <b>{html.escape(tool)}</b><br/><small>{html.escape(reason)}</small></div>',
                unsafe_allow_html=True,
            )
    with col2:
        st.markdown(f"#### ⚠️ {sections['common_mistake'].title.upper()}")
        st.markdown(
            f'<div class="mistake-quote">"{html.escape(sections["common_mistake"].body)}"</div>',
            unsafe_allow_html=True,
        )

    # MVP cut line
    st.markdown(f"#### 🛑 {sections['mvp_cut_line'].title.upper()}")
    cut = sections["mvp_cut_line"].body
    col1, col2 = st.columns(2)
    with col1:
        st.markdown("**✅ Must Build (v1)**")
        for item in cut["must_build"]:
            st.markdown(f"<div>• {html.escape(item)}</div>", unsafe_allow_html=True)
    with col2:
        st.markdown("**❌ Must Cut (Wait for v2)**")
        for item in cut["must_cut"]:
            st.markdown(f'<div class="cut-item">• {html.escape(item)}</div>', unsafe_allow_html=True)

    # Why this stack wins
    st.markdown(f"#### 🧠 {sections['why_this_stack_wins'].title.upper()}")
    for i, point in sections["why_this_stack_wins"].body:
        st.markdown(f"<div><b>{i}.</b> {html.escape(point)}</div>", unsafe_allow_html=True)

    st.divider()
    c1, c2 = st.columns(2)
    with c1:
        st.download_button(
            "📥 Download report",
            to_markdown(phase.result, goal=ctrl.optimization_goal),
            f"tech-stack-{datetime.now().strftime('%Y%m%d')}.md",
            "text/markdown",
            key="download",
            use_container_width=True,
        )
    with c2:
        st.button(
            "🔄 Start over with a new idea",
            key="reset",
            on_click=_on_reset,
            use_container_width=True,
        )
