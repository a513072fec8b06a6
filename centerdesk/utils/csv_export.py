# centerdesk/utils/csv_export.py
import csv
from typing import Any, Dict, List

import pandas as pd

from centerdesk.core.errors import ValidationError


def rows_to_csv(rows: List[Dict[str, Any]]) -> str:
    """
    Serialize rows to CSV. The header is the keys of the first row; fields
    containing a comma, quote or newline are quoted with doubled quotes.
    """
    if not rows:
        raise ValidationError("No data to export.")

    frame = pd.DataFrame(rows, columns=list(rows[0].keys()))
    return frame.to_csv(
        index=False,
        lineterminator="\n",
        quoting=csv.QUOTE_MINIMAL,
        doublequote=True
    )
