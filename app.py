"""
EAMCET College Predictor: Streamlit UI.

Loads the cutoff dataset once, collects a student's rank, category and
gender, and lists the colleges they would likely have got into based on
last year's closing ranks.
"""

import streamlit as st
import pandas as pd

import config
from db import DatasetError, load_colleges
from log_config import get_logger, setup_logging
from ranking import (
    CATEGORY_LABELS,
    COLLEGE_TYPE_LABELS,
    GENDER_LABELS,
    Category,
    CollegeType,
    Gender,
    SearchFilters,
    fee_range,
    search_colleges,
)
from report import export_csv, export_filename, result_stats, to_display_frame
from validators import parse_max_fee, validate_rank

setup_logging()
logger = get_logger("app")

NO_MATCHES = "No colleges found matching your criteria. Try adjusting your filters."

# ---------------------------------------------------------------------------
# Page config
# ---------------------------------------------------------------------------
st.set_page_config(
    page_title="EAMCET College Predictor",
    page_icon=":mortar_board:",
    layout="wide",
)

st.title("EAMCET College Predictor")
st.caption("Find engineering colleges based on your EAMCET rank and category")


# ---------------------------------------------------------------------------
# Data loading (cached)
# ---------------------------------------------------------------------------
@st.cache_data
def load_data(path: str) -> pd.DataFrame:
    """Load and clean the college dataset. Cached per path."""
    return load_colleges(path)


try:
    colleges = load_data(config.DATA_PATH)
except DatasetError as exc:
    logger.error("Failed to load college data: %s", exc)
    st.error("Failed to load college data. Please refresh the page.")
    st.stop()

_, fee_max = fee_range(colleges)

if "results" not in st.session_state:
    st.session_state.results = None
    st.session_state.searched_rank = None

# ---------------------------------------------------------------------------
# Search form
# ---------------------------------------------------------------------------
st.subheader("Search Criteria")

col1, col2, col3 = st.columns(3)
with col1:
    rank = st.number_input("Your EAMCET Rank *", min_value=0, value=0, step=1)
with col2:
    category = st.selectbox(
        "Category *",
        list(Category),
        format_func=lambda c: CATEGORY_LABELS[c],
    )
with col3:
    gender = st.selectbox(
        "Gender *",
        list(Gender),
        format_func=lambda g: GENDER_LABELS[g],
    )

max_fee_input = None
college_type = CollegeType.ALL
if st.toggle("Show Filters"):
    col4, col5 = st.columns(2)
    with col4:
        max_fee_input = st.number_input(
            "Maximum Fee (Optional)",
            min_value=0,
            value=None,
            step=1000,
            placeholder=f"Max: ₹{fee_max:,.0f}",
        )
    with col5:
        college_type = st.selectbox(
            "College Type (Optional)",
            list(CollegeType),
            format_func=lambda t: COLLEGE_TYPE_LABELS[t],
        )

# ---------------------------------------------------------------------------
# Run search
# ---------------------------------------------------------------------------
if st.button("Find Colleges", type="primary", disabled=rank <= 0):
    error = validate_rank(rank)
    if error:
        st.session_state.results = None
        st.error(error)
    else:
        filters = SearchFilters(
            rank=int(rank),
            category=category,
            gender=gender,
            max_fee=parse_max_fee(max_fee_input),
            coed=college_type,
        )
        try:
            st.session_state.results = search_colleges(colleges, filters)
            st.session_state.searched_rank = filters.rank
        except Exception:
            logger.exception("Search failed for %s", filters)
            st.session_state.results = None
            st.error("An error occurred while searching. Please try again.")

results = st.session_state.results

if results is not None and results.empty:
    st.warning(NO_MATCHES)

# ---------------------------------------------------------------------------
# Statistics
# ---------------------------------------------------------------------------
stats = result_stats(results) if results is not None else None
if stats:
    m1, m2, m3, m4 = st.columns(4)
    m1.metric("Total Colleges", stats["total"])
    m2.metric("Eligible", stats["eligible"])
    m3.metric("Not Eligible", stats["not_eligible"])
    m4.metric("Avg Fee", f"₹{stats['avg_fee']:,}")

# ---------------------------------------------------------------------------
# Results table + export
# ---------------------------------------------------------------------------
if stats:
    st.subheader(f"Search Results ({stats['total']} colleges found)")
    st.caption(
        "Colleges are sorted by eligibility and cutoff ranks. "
        "Green rows indicate you're eligible."
    )

    def _highlight(row: pd.Series) -> list[str]:
        color = "#e8f5e9" if row["Status"] == "Eligible" else "#ffebee"
        return [f"background-color: {color}"] * len(row)

    display_df = to_display_frame(results)
    st.dataframe(
        display_df.style.apply(_highlight, axis=1),
        use_container_width=True,
        hide_index=True,
        height=600,
    )

    st.download_button(
        "Export CSV",
        data=export_csv(results),
        file_name=export_filename(st.session_state.searched_rank),
        mime="text/csv",
    )

# ---------------------------------------------------------------------------
# Footer
# ---------------------------------------------------------------------------
st.markdown("---")
st.caption(
    "This tool is for guidance only. Please verify cutoffs with official EAMCET "
    "counseling results before making final decisions."
)
st.caption("Data based on previous year's cutoff trends. Actual cutoffs may vary.")
