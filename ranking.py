"""
Cutoff lookup and eligibility search.

Resolves which cutoff column applies to a (category, gender) pair and
ranks institutions against a student's rank: one row per institution,
eligible ones first, then by cutoff rank ascending.
"""

from dataclasses import dataclass
from enum import Enum

import pandas as pd

from log_config import get_logger

logger = get_logger("ranking")


class Category(str, Enum):
    OC = "OC"
    SC = "SC"
    ST = "ST"
    BCA = "BCA"
    BCB = "BCB"
    BCC = "BCC"
    BCD = "BCD"
    BCE = "BCE"
    OC_EWS = "OC_EWS"


class Gender(str, Enum):
    BOYS = "BOYS"
    GIRLS = "GIRLS"


class CollegeType(str, Enum):
    COED = "COED"
    BOYS = "BOYS"
    GIRLS = "GIRLS"
    ALL = "ALL"


CATEGORY_LABELS = {
    Category.OC: "OC (Open Category)",
    Category.SC: "SC (Scheduled Caste)",
    Category.ST: "ST (Scheduled Tribe)",
    Category.BCA: "BC-A",
    Category.BCB: "BC-B",
    Category.BCC: "BC-C",
    Category.BCD: "BC-D",
    Category.BCE: "BC-E",
    Category.OC_EWS: "OC-EWS",
}

GENDER_LABELS = {
    Gender.BOYS: "Boys",
    Gender.GIRLS: "Girls",
}

COLLEGE_TYPE_LABELS = {
    CollegeType.ALL: "All Types",
    CollegeType.COED: "Co-Education",
    CollegeType.BOYS: "Boys Only",
    CollegeType.GIRLS: "Girls Only",
}

# Cutoff column holding last cycle's closing rank, per category and gender
CUTOFF_FIELDS: dict[Category, dict[Gender, str]] = {
    Category.OC: {Gender.BOYS: "oc_boys", Gender.GIRLS: "oc_girls"},
    Category.SC: {Gender.BOYS: "sc_boys", Gender.GIRLS: "sc_girls"},
    Category.ST: {Gender.BOYS: "st_boys", Gender.GIRLS: "st_girls"},
    Category.BCA: {Gender.BOYS: "bca_boys", Gender.GIRLS: "bca_girls"},
    Category.BCB: {Gender.BOYS: "bcb_boys", Gender.GIRLS: "bcb_girls"},
    Category.BCC: {Gender.BOYS: "bcc_boys", Gender.GIRLS: "bcc_girls"},
    Category.BCD: {Gender.BOYS: "bcd_boys", Gender.GIRLS: "bcd_girls"},
    Category.BCE: {Gender.BOYS: "bce_boys", Gender.GIRLS: "bce_girls"},
    Category.OC_EWS: {Gender.BOYS: "oc_ews_boys", Gender.GIRLS: "oc_ews_girls"},
}

CUTOFF_COLUMNS = [col for by_gender in CUTOFF_FIELDS.values() for col in by_gender.values()]

# Rows sharing both values are one institution
GROUP_KEY = ["inst_code", "inst_name"]


@dataclass
class SearchFilters:
    """
    A student's query. ``max_fee=None`` disables the fee filter and
    ``coed=None`` or ``CollegeType.ALL`` disables the type filter.
    Plain strings are accepted for the enumerated fields.
    """

    rank: int
    category: Category
    gender: Gender
    max_fee: float | None = None
    coed: CollegeType | None = None

    def __post_init__(self):
        self.category = Category(self.category)
        self.gender = Gender(self.gender)
        if self.coed is not None:
            self.coed = CollegeType(self.coed)


def cutoff_field(category: Category, gender: Gender) -> str:
    """Return the column holding the cutoff for this category and gender."""
    return CUTOFF_FIELDS[Category(category)][Gender(gender)]


def cutoff_rank(record, category: Category, gender: Gender) -> int | None:
    """Cutoff rank of a single record (dict or row), or None if nobody was admitted."""
    value = record.get(cutoff_field(category, gender))
    if value is None or pd.isna(value):
        return None
    return int(value)


def is_eligible(record, rank: int, category: Category, gender: Gender) -> bool:
    cutoff = cutoff_rank(record, category, gender)
    if cutoff is None:
        return False
    return rank <= cutoff


def _apply_filters(colleges: pd.DataFrame, filters: SearchFilters) -> pd.DataFrame:
    """Drop rows over the fee ceiling or of the wrong college type."""
    mask = pd.Series(True, index=colleges.index)

    # Rows without a recorded fee always pass
    if filters.max_fee is not None:
        mask &= colleges["fee"].isna() | (colleges["fee"] <= filters.max_fee)

    if filters.coed is not None and filters.coed != CollegeType.ALL:
        mask &= colleges["coed"].eq(filters.coed.value)

    return colleges[mask]


def search_colleges(colleges: pd.DataFrame, filters: SearchFilters) -> pd.DataFrame:
    """
    Rank institutions for a student.

    1. Drop rows failing the fee / type filters
    2. Drop rows with no cutoff for the student's category and gender
    3. Keep the row with the lowest cutoff per (inst_code, inst_name);
       equal cutoffs keep the row that comes first in the input
    4. eligible = rank <= cutoff_rank
    5. Sort: eligible first, then cutoff_rank ASC (stable)

    Returns one row per institution: the representative record's columns
    plus ``cutoff_rank`` and ``eligible``.
    """
    if colleges.empty:
        return pd.DataFrame(columns=[*colleges.columns, "cutoff_rank", "eligible"])

    field = cutoff_field(filters.category, filters.gender)

    candidates = _apply_filters(colleges, filters)
    candidates = candidates[candidates[field].notna()]

    best = (
        candidates.sort_values(field, kind="stable")
        .drop_duplicates(subset=GROUP_KEY, keep="first")
        .copy()
    )
    best["cutoff_rank"] = best[field].astype("int64")
    best["eligible"] = best["cutoff_rank"] >= filters.rank

    results = best.sort_values(
        by=["eligible", "cutoff_rank"],
        ascending=[False, True],
        kind="stable",
    ).reset_index(drop=True)

    logger.debug(
        "search rank=%s %s/%s: %d rows, %d candidates, %d results (%d eligible)",
        filters.rank,
        filters.category.value,
        filters.gender.value,
        len(colleges),
        len(candidates),
        len(results),
        int(results["eligible"].sum()),
    )
    return results


def fee_range(colleges: pd.DataFrame) -> tuple[int, int]:
    """Min and max of the positive fees in whole rupees, (0, 0) if there are none."""
    if "fee" not in colleges.columns:
        return 0, 0
    fees = colleges["fee"].dropna()
    fees = fees[fees > 0]
    if fees.empty:
        return 0, 0
    return int(round(fees.min())), int(round(fees.max()))


def unique_places(colleges: pd.DataFrame) -> list[str]:
    if "place" not in colleges.columns:
        return []
    return sorted(colleges["place"].dropna().unique())
