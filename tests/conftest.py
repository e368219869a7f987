import pandas as pd
import pytest

from db import clean_colleges


def college_row(code="1001", name="Alpha Institute of Technology", **overrides) -> dict:
    row = {
        "inst_code": code,
        "inst_name": name,
        "place": "Hyderabad",
        "coed": "COED",
        "estd": 1998,
        "fee": 50000,
    }
    row.update(overrides)
    return row


@pytest.fixture
def make_colleges():
    """Build a cleaned colleges DataFrame from row dicts."""

    def _make(*rows: dict) -> pd.DataFrame:
        return clean_colleges(pd.DataFrame(list(rows)))

    return _make
