"""
College dataset loading and SQLite snapshot.

Reads the cutoff dataset from JSON, CSV or a SQLite snapshot, maps the
source headers onto canonical column names and coerces column types so
the search core can work on a clean DataFrame.
"""

import os
import re

import pandas as pd
from sqlalchemy import create_engine
from sqlalchemy.exc import SQLAlchemyError

import config
from log_config import get_logger
from ranking import CUTOFF_COLUMNS

logger = get_logger("db")

TEXT_COLUMNS = ["inst_code", "inst_name", "place", "coed"]
REQUIRED_COLUMNS = ["inst_code", "inst_name"]
CANONICAL_COLUMNS = [*TEXT_COLUMNS, "estd", "fee", *CUTOFF_COLUMNS]

# Source headers come out of PDF extraction with stray spaces
# ("OC_BO YS", "COLLFE E"), so lookups use the header with all
# whitespace removed, upper-cased.
HEADER_ALIASES = {
    "INSTCODE": "inst_code",
    "NAMEOFTHEINSTITUTION": "inst_name",
    "PLACE": "place",
    "COED": "coed",
    "ESTD": "estd",
    "COLLFEE": "fee",
    **{col.upper(): col for col in CANONICAL_COLUMNS},
}


class DatasetError(Exception):
    """The college dataset is missing, unreadable or lacks identity columns."""


def get_engine(db_path: str = config.DB_PATH):
    return create_engine(f"sqlite:///{db_path}", echo=False)


def _header_key(column) -> str:
    return re.sub(r"\s+", "", str(column)).upper()


def normalize_columns(df: pd.DataFrame) -> pd.DataFrame:
    """Rename known source headers to canonical names; unknown headers are kept."""
    renames = {}
    for column in df.columns:
        canonical = HEADER_ALIASES.get(_header_key(column))
        if canonical and canonical not in renames.values():
            renames[column] = canonical
    return df.rename(columns=renames)


def read_source(path: str) -> pd.DataFrame:
    """Read the raw dataset; the format is picked from the file suffix."""
    if not os.path.exists(path):
        raise DatasetError(f"College data not found: {path}")

    suffix = os.path.splitext(path)[1].lower()
    try:
        if suffix == ".json":
            return pd.read_json(path, orient="records", dtype=False)
        if suffix == ".csv":
            return pd.read_csv(path, dtype=str)
        if suffix in (".db", ".sqlite", ".sqlite3"):
            return pd.read_sql_table(config.TABLE_NAME, get_engine(path))
    except (ValueError, SQLAlchemyError) as exc:
        raise DatasetError(f"Could not read college data from {path}: {exc}") from exc

    raise DatasetError(f"Unsupported college data format: {suffix or path}")


def clean_colleges(raw: pd.DataFrame) -> pd.DataFrame:
    """
    Canonical columns and types:
    text columns stripped (coed upper-cased), estd and cutoffs as Int64,
    fee as float. Absent optional columns are added as nulls.
    """
    if raw.empty and len(raw.columns) == 0:
        return pd.DataFrame(columns=CANONICAL_COLUMNS)

    df = normalize_columns(raw)

    missing_required = [col for col in REQUIRED_COLUMNS if col not in df.columns]
    if missing_required:
        raise DatasetError(f"College data is missing columns: {', '.join(missing_required)}")

    missing = [col for col in CANONICAL_COLUMNS if col not in df.columns]
    if missing:
        logger.warning("College data has no %s columns; treating them as empty", ", ".join(missing))
        for col in missing:
            df[col] = None

    for col in TEXT_COLUMNS:
        text = df[col].astype(str).str.strip()
        df[col] = text.where(df[col].notna())
    df["coed"] = df["coed"].str.upper()

    for col in ["estd", *CUTOFF_COLUMNS]:
        df[col] = pd.to_numeric(df[col], errors="coerce").round().astype("Int64")
    df["fee"] = pd.to_numeric(df["fee"], errors="coerce").astype(float)

    return df


def load_colleges(path: str = config.DATA_PATH) -> pd.DataFrame:
    """Load and clean the dataset at ``path``."""
    raw = read_source(path)
    colleges = clean_colleges(raw)
    logger.info(
        "Loaded %d college rows (%d institutions) from %s",
        len(colleges),
        colleges.drop_duplicates(subset=["inst_code", "inst_name"]).shape[0],
        path,
    )
    return colleges


def build_database(source: str = config.DATA_PATH, db_path: str = config.DB_PATH) -> pd.DataFrame:
    """
    Snapshot a JSON/CSV dataset into SQLite for deployments that ship a
    database file. Returns the cleaned DataFrame that was written.
    """
    colleges = load_colleges(source)
    engine = get_engine(db_path)
    colleges.to_sql(config.TABLE_NAME, engine, if_exists="replace", index=False)
    logger.info("Wrote %d rows to %s (table %s)", len(colleges), db_path, config.TABLE_NAME)
    return colleges


if __name__ == "__main__":
    from log_config import setup_logging

    setup_logging()
    df = build_database()
    print(f"colleges table: {len(df)} rows, {len(df.columns)} columns")
    print("Columns:", list(df.columns))
