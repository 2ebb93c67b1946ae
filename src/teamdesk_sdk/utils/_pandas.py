# Copyright (c) TeamDesk SDK contributors.
# Licensed under the MIT license.

"""Internal pandas helpers"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Dict, Iterable, List

import numpy as np
import pandas as pd

if TYPE_CHECKING:
    from ..models.record import Record


def dataframe_to_records(df: pd.DataFrame, na_as_null: bool = False) -> List[Dict[str, Any]]:
    """Convert a DataFrame to a list of dicts, converting Timestamps to ISO strings.

    :param df: Input DataFrame.
    :param na_as_null: When False (default), missing values are omitted from each dict.
        When True, missing values are included as None (sends null to TeamDesk, clearing the field).
    """
    records = []
    for row in df.to_dict(orient="records"):
        clean = {}
        for k, v in row.items():
            if pd.notna(v):
                if isinstance(v, pd.Timestamp):
                    v = v.isoformat()
                elif isinstance(v, np.generic):
                    # numpy scalars are not JSON serializable
                    v = v.item()
                clean[k] = v
            elif na_as_null:
                clean[k] = None
        records.append(clean)
    return records


def records_to_dataframe(records: Iterable["Record"]) -> pd.DataFrame:
    """Build a DataFrame from Records, with the ``@row.id`` / ``@row.allow`` columns first."""
    return pd.DataFrame([r.to_api_dict() for r in records])
