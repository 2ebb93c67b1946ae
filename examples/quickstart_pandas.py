# Copyright (c) TeamDesk SDK contributors.
# Licensed under the MIT license.

import sys
from pathlib import Path

# Add src to PYTHONPATH for local runs
sys.path.append(str(Path(__file__).resolve().parents[1] / "src"))

import pandas as pd

from teamdesk_sdk import TeamDeskClient

TABLE = sys.argv[1] if len(sys.argv) > 1 else "Contacts"

with TeamDeskClient.from_env() as client:
    df = client.table(TABLE).select().to_dataframe(all_pages=True)
    print(df.head())
    print(f"{len(df)} rows, columns: {list(df.columns)}")

    # Upsert from a DataFrame; missing values are left out of the payload
    incoming = pd.DataFrame(
        {
            "Email": ["john@example.com", "jane@example.com"],
            "Name": ["John Doe", None],
        }
    )
    results = client.table(TABLE).upsert(incoming, match="Email")
    summary = pd.DataFrame(
        [{"email": e, "success": r.success, "action": r.action, "status": r.status} for e, r in zip(incoming["Email"], results)]
    )
    print(summary)
