# web_app.py

import logging
from typing import Dict, Optional

import streamlit as st

from pert_estimator.config import get_settings
from pert_estimator.errors import ShareCodeError, TaskValidationError
from pert_estimator.estimate_session import (
    add_task,
    aggregate_estimate,
    default_estimate_set,
    load_shared_estimate,
    remove_task,
    rename_estimate,
    set_ceil_numbers,
    share_link_for,
)
from pert_estimator.logging_setup import setup_logging
from pert_estimator.models import EstimateSet
from pert_estimator.tools.chart_builder import build_estimate_chart
from pert_estimator.tools.exporter import (
    export_file_name,
    export_markdown_summary,
    export_tasks_csv,
)
from pert_estimator.tools.pert_calculator import format_hours, format_total

settings = get_settings()

st.set_page_config(page_title=settings.app_title, layout="centered")
setup_logging(log_dir=settings.log_dir, console_level=settings.log_level)
logger = logging.getLogger("web_app")

FORM_FIELDS = {
    "description": "task_description",
    "estimatedA": "task_estimated_a",
    "estimatedB": "task_estimated_b",
    "estimatedC": "task_estimated_c",
}


# -------------------------------------------------------------------
# Session state helpers
# -------------------------------------------------------------------

def _estimate() -> EstimateSet:
    return st.session_state["estimate_set"]


def _set_estimate(estimate: EstimateSet) -> None:
    st.session_state["estimate_set"] = estimate


def _reset_task_form() -> None:
    st.session_state[FORM_FIELDS["description"]] = ""
    st.session_state[FORM_FIELDS["estimatedA"]] = 0.0
    st.session_state[FORM_FIELDS["estimatedB"]] = 0.0
    st.session_state[FORM_FIELDS["estimatedC"]] = 0.0


def _init_session() -> None:
    """
    One-time setup per browser session.

    A `?code=...` parameter replaces the default estimate wholesale. A
    malformed code leaves the defaults in place and queues an error message.
    """
    if "estimate_set" in st.session_state:
        return

    estimate = default_estimate_set(settings)
    code = st.query_params.get(settings.share_param)
    if code:
        try:
            estimate = load_shared_estimate(code)
        except ShareCodeError as e:
            st.session_state["share_load_error"] = str(e)

    _set_estimate(estimate)
    st.session_state["estimate_name"] = estimate.estimate_name
    st.session_state["is_ceil_numbers"] = estimate.is_ceil_numbers
    st.session_state["task_form_errors"] = {}
    _reset_task_form()


# -------------------------------------------------------------------
# Widget callbacks
# -------------------------------------------------------------------

def _on_rename() -> None:
    _set_estimate(rename_estimate(_estimate(), st.session_state["estimate_name"]))


def _on_toggle_ceil() -> None:
    _set_estimate(set_ceil_numbers(_estimate(), st.session_state["is_ceil_numbers"]))


def _on_add_task() -> None:
    try:
        updated = add_task(
            _estimate(),
            st.session_state[FORM_FIELDS["description"]],
            st.session_state[FORM_FIELDS["estimatedA"]],
            st.session_state[FORM_FIELDS["estimatedB"]],
            st.session_state[FORM_FIELDS["estimatedC"]],
        )
    except TaskValidationError as e:
        logger.debug("Task rejected: %s", e.errors)
        st.session_state["task_form_errors"] = e.errors
        return

    _set_estimate(updated)
    st.session_state["task_form_errors"] = {}
    _reset_task_form()


def _on_remove_task(task_id: str) -> None:
    _set_estimate(remove_task(_estimate(), task_id))


def _field_error(field_name: str) -> None:
    errors: Dict[str, str] = st.session_state.get("task_form_errors") or {}
    message = errors.get(field_name)
    if message:
        st.error(message)


def _current_origin() -> str:
    """Origin the browser used to reach us, else the configured public URL."""
    origin: Optional[str] = st.context.headers.get("Origin")
    if origin:
        return origin.rstrip("/")
    return settings.public_url


@st.dialog("Share link")
def _share_dialog(link: str) -> None:
    st.write(
        "Anyone with this link can view this estimate. "
        "Editing it afterwards produces a new link."
    )
    # st.code renders a copy-to-clipboard button
    st.code(link, language=None)


# -------------------------------------------------------------------
# Streamlit UI
# -------------------------------------------------------------------

st.markdown(
    """
    <style>
    [data-testid="stAppViewContainer"] .block-container {
        max-width: 64rem !important;
        padding-top: 2rem !important;
    }
    .pert-total {
        font-size: 1.3rem;
        font-weight: 700;
        text-align: right;
    }
    </style>
    """,
    unsafe_allow_html=True,
)

_init_session()

st.title(settings.app_title)
st.caption("Three-point (PERT) estimation: expected = (a + 4b + c) / 6, deviation = (a - c) / 6.")

share_error = st.session_state.pop("share_load_error", None)
if share_error:
    st.error(f"The shared link could not be loaded, starting a new estimate instead. ({share_error})")

# ---------------- Estimate name + share ----------------
name_col, share_col = st.columns((5, 1), vertical_alignment="bottom")
with name_col:
    st.text_input(
        "Estimate name",
        key="estimate_name",
        placeholder="Estimate title",
        on_change=_on_rename,
    )
with share_col:
    if st.button("Share", key="share_button", use_container_width=True):
        _share_dialog(share_link_for(_estimate(), origin=_current_origin(), settings=settings))

# ---------------- Task form ----------------
st.markdown("### Add a task")
with st.form("task_form", clear_on_submit=False):
    st.text_input("Task", key=FORM_FIELDS["description"], placeholder="Task name")
    _field_error("description")

    st.number_input("Pessimistic estimate (h)", key=FORM_FIELDS["estimatedA"], step=1.0)
    _field_error("estimatedA")

    st.number_input("Most likely estimate (h)", key=FORM_FIELDS["estimatedB"], step=1.0)
    _field_error("estimatedB")

    st.number_input("Optimistic estimate (h)", key=FORM_FIELDS["estimatedC"], step=1.0)
    _field_error("estimatedC")

    st.form_submit_button("Add task", type="primary", on_click=_on_add_task)

# ---------------- Totals ----------------
st.checkbox(
    "Round values up to the next whole hour",
    key="is_ceil_numbers",
    on_change=_on_toggle_ceil,
)

estimate = _estimate()
is_ceil = estimate.is_ceil_numbers
totals = aggregate_estimate(estimate)

st.markdown(
    f"<div class='pert-total'>Total estimated: {format_total(totals, is_ceil)}</div>",
    unsafe_allow_html=True,
)

dl_csv, dl_md = st.columns(2)
with dl_csv:
    st.download_button(
        "Download CSV",
        export_tasks_csv(estimate.tasks),
        file_name=export_file_name(estimate.estimate_name),
        mime="text/csv",
        key="download_csv",
    )
with dl_md:
    st.download_button(
        "Download summary (Markdown)",
        export_markdown_summary(estimate),
        file_name=export_file_name(estimate.estimate_name, extension="md"),
        mime="text/markdown",
        key="download_md",
    )

# ---------------- Task table ----------------
st.markdown("### Tasks")
if not estimate.tasks:
    st.info("No tasks yet. Add one with the form above.")
else:
    widths = (3, 1, 1, 1, 1, 1, 1)
    header = st.columns(widths)
    for col, label in zip(
        header,
        ["Task", "Pessimistic (h)", "Most likely (h)", "Optimistic (h)", "Estimate (h)", "Std. dev. (h)", ""],
    ):
        col.markdown(f"**{label}**")

    for task in estimate.tasks:
        row = st.columns(widths)
        row[0].write(task.description)
        row[1].write(format_hours(task.estimated_a, is_ceil))
        row[2].write(format_hours(task.estimated_b, is_ceil))
        row[3].write(format_hours(task.estimated_c, is_ceil))
        row[4].write(format_hours(task.three_point_estimated, is_ceil))
        row[5].write(format_hours(task.standard_deviation_estimated, is_ceil))
        row[6].button(
            "Remove",
            key=f"remove_{task.id}",
            on_click=_on_remove_task,
            args=(task.id,),
        )

    fig = build_estimate_chart(estimate.tasks, is_ceil)
    if fig is not None:
        st.markdown("#### Estimate per task")
        st.plotly_chart(fig, use_container_width=True)
