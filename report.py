"""
Result summaries and CSV export.

Turns the DataFrame returned by ``ranking.search_colleges`` into the
statistics panel, the on-screen table and the downloadable report.
"""

import pandas as pd

NOT_AVAILABLE = "N/A"

EXPORT_COLUMNS = ["College Name", "Code", "Location", "Cutoff Rank", "Fee", "Type", "Status"]
DISPLAY_COLUMNS = ["College Name", "Code", "Estd", "Location", "Cutoff Rank", "Fee", "Type", "Status"]


def status_label(eligible: bool) -> str:
    return "Eligible" if eligible else "Not Eligible"


def _missing(value) -> bool:
    # Zero fees / cutoffs are placeholders in the source data
    return value is None or pd.isna(value) or value == 0


def _export_value(value):
    if _missing(value):
        return NOT_AVAILABLE
    return int(value) if float(value).is_integer() else float(value)


def _format_rank(value) -> str:
    return NOT_AVAILABLE if _missing(value) else f"{int(value):,}"


def _format_fee(value) -> str:
    return NOT_AVAILABLE if _missing(value) else f"₹{value:,.0f}"


def _format_year(value) -> str:
    return "" if value is None or pd.isna(value) else str(int(value))


def result_stats(results: pd.DataFrame) -> dict | None:
    """
    Counts for the statistics panel, or None when there are no results.
    ``avg_fee`` is the rounded mean of the positive fees (0 if none).
    """
    if results.empty:
        return None

    eligible = int(results["eligible"].sum())
    fees = results["fee"].dropna()
    fees = fees[fees > 0]
    avg_fee = int(round(float(fees.mean()))) if not fees.empty else 0

    return {
        "total": len(results),
        "eligible": eligible,
        "not_eligible": len(results) - eligible,
        "avg_fee": avg_fee,
    }


def to_export_frame(results: pd.DataFrame) -> pd.DataFrame:
    """One line per result, with N/A for a missing cutoff or fee."""
    if results.empty:
        return pd.DataFrame(columns=EXPORT_COLUMNS)

    return pd.DataFrame(
        {
            "College Name": results["inst_name"],
            "Code": results["inst_code"],
            "Location": results["place"],
            "Cutoff Rank": results["cutoff_rank"].map(_export_value),
            "Fee": results["fee"].map(_export_value),
            "Type": results["coed"],
            "Status": results["eligible"].map(status_label),
        }
    ).reset_index(drop=True)


def export_csv(results: pd.DataFrame) -> str:
    return to_export_frame(results).to_csv(index=False, lineterminator="\n")


def export_filename(rank: int) -> str:
    return f"eamcet-colleges-rank-{rank}.csv"


def to_display_frame(results: pd.DataFrame) -> pd.DataFrame:
    """Results table for the UI; every column pre-formatted as text."""
    if results.empty:
        return pd.DataFrame(columns=DISPLAY_COLUMNS)

    return pd.DataFrame(
        {
            "College Name": results["inst_name"],
            "Code": results["inst_code"],
            "Estd": results["estd"].map(_format_year),
            "Location": results["place"],
            "Cutoff Rank": results["cutoff_rank"].map(_format_rank),
            "Fee": results["fee"].map(_format_fee),
            "Type": results["coed"],
            "Status": results["eligible"].map(status_label),
        }
    ).reset_index(drop=True)
