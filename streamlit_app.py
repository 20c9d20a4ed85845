"""Streamlit Web UI for tone-resizer.

Paste text, pick a tone and a length (preset or box height), and get a
rewrite from the enhance server. Over-long drafts are still shown.
Resizing the output box afterwards re-requests the text at the new size.
"""

from __future__ import annotations

import asyncio
import logging

import streamlit as st
from dotenv import load_dotenv

load_dotenv()

from tone_resizer.clients.enhance_client import EnhanceClient
from tone_resizer.config import load_config
from tone_resizer.models.persona import Persona
from tone_resizer.models.rewrite import DocumentType, RewriteFailure, RewriteRequest
from tone_resizer.pipeline.resize_session import ResizeRewriter
from tone_resizer.utils.sizing import LengthPreset, target_words_for_preset, words_for_height
from tone_resizer.utils.word_count import count_words

logger = logging.getLogger(__name__)

TONES = ["professional", "friendly", "formal", "casual", "persuasive", "empathetic"]

# ---------------------------------------------------------------------------
# Page config
# ---------------------------------------------------------------------------

st.set_page_config(
    page_title="Make it shorter!!!",
    page_icon=":scissors:",
    layout="wide",
)

CONFIG = load_config()

if "outcome" not in st.session_state:
    st.session_state.outcome = None
if "resize_height" not in st.session_state:
    st.session_state.resize_height = None
if "persona" not in st.session_state:
    st.session_state.persona = Persona()

# ---------------------------------------------------------------------------
# Sidebar - persona
# ---------------------------------------------------------------------------

with st.sidebar:
    st.title("Persona")
    persona: Persona = st.session_state.persona
    style = st.text_input("Style", value=persona.style)
    formality = st.selectbox(
        "Formality",
        ["low", "moderate", "high"],
        index=["low", "moderate", "high"].index(persona.formality)
        if persona.formality in ("low", "moderate", "high")
        else 1,
    )
    context = st.text_input("Context", value=persona.context)
    traits = st.text_input("Traits (comma separated)", value=", ".join(persona.traits))
    st.session_state.persona = Persona(
        style=style,
        formality=formality,
        context=context,
        traits=[t.strip() for t in traits.split(",") if t.strip()],
    )


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


@st.cache_resource
def _get_client() -> EnhanceClient:
    return EnhanceClient.from_config(CONFIG.client)


if "rewriter" not in st.session_state:
    st.session_state.rewriter = ResizeRewriter.from_config(
        CONFIG.client, lambda request: _get_client().enhance(request)
    )


def _run_rewrite(request: RewriteRequest):
    rewriter: ResizeRewriter = st.session_state.rewriter
    rewriter.set_source(request)
    return asyncio.run(rewriter.session.run(lambda: _get_client().enhance(request)))


def _run_resize(height: int):
    """Re-request the current rewrite for a new output box height."""
    rewriter: ResizeRewriter = st.session_state.rewriter

    async def _settle():
        rewriter.resize(height)
        return await rewriter.settle()

    return asyncio.run(_settle())


def _show_outcome(outcome) -> None:
    if isinstance(outcome, RewriteFailure):
        st.error(outcome.message)
        if outcome.draft:
            st.text_area(
                f"Rejected draft ({outcome.word_count} words)", outcome.draft, height=240
            )
    else:
        if outcome.subject:
            st.text_input("Subject", value=outcome.subject)
        st.text_area("Body", value=outcome.body, height=st.session_state.resize_height or 320)
        st.caption(f"{outcome.word_count} words")


# ---------------------------------------------------------------------------
# Main layout
# ---------------------------------------------------------------------------

left, right = st.columns(2)

with left:
    st.header("Input")
    doc_type = st.radio(
        "Type", [t.value for t in DocumentType], index=0, horizontal=True
    )
    text = st.text_area(
        "Your Content",
        height=320,
        placeholder=f"Paste or write your {doc_type} content here...",
    )
    if text:
        st.caption(f"{count_words(text)} words")

    tone = st.selectbox("Tone", TONES, index=0)
    length_mode = st.radio("Length", ["Preset", "Box height"], horizontal=True)
    box_height = None
    if length_mode == "Preset":
        preset = st.radio(
            "Preset", [p.value for p in LengthPreset], index=1, horizontal=True
        )
        target = target_words_for_preset(text, preset) if text.strip() else None
    else:
        box_height = st.slider("Output box height (px)", 100, 800, 200, step=8)
        target = words_for_height(box_height)
    if target is not None:
        st.caption(f"Target: {target} words")

    submitted = st.button("Enhance", type="primary", disabled=not text.strip())

with right:
    st.header("Output")
    if submitted and target is not None:
        request = RewriteRequest(
            content=text,
            tone=st.session_state.persona.tone_descriptor(tone),
            target_words=max(1, target),
            document_type=DocumentType(doc_type),
        )
        with st.spinner(f"Rewriting to {request.target_words} words..."):
            outcome = _run_rewrite(request)
        if outcome is None:
            st.info("A newer request superseded this one.")
        else:
            st.session_state.outcome = outcome
            st.session_state.resize_height = box_height if length_mode == "Box height" else None

    if st.session_state.outcome is not None:
        # Dragging the box height re-requests the same text at the new size
        height = st.slider(
            "Resize output box (px)",
            100,
            800,
            st.session_state.resize_height or 320,
            step=8,
        )
        st.caption(f"Box fits about {words_for_height(height)} words")
        if st.session_state.resize_height is not None and height != st.session_state.resize_height:
            with st.spinner(f"Resizing to {words_for_height(height)} words..."):
                resized = _run_resize(height)
            if resized is not None:
                st.session_state.outcome = resized
        st.session_state.resize_height = height
        _show_outcome(st.session_state.outcome)
