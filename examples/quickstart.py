# Copyright (c) TeamDesk SDK contributors.
# Licensed under the MIT license.

import sys
import time
from pathlib import Path

# Add src to PYTHONPATH for local runs
sys.path.append(str(Path(__file__).resolve().parents[1] / "src"))

from teamdesk_sdk import RateLimitError, ServerError, TeamDeskClient, TeamDeskError, ValidationError

# Credentials come from TEAMDESK_APP_ID and TEAMDESK_TOKEN (or TEAMDESK_USER / TEAMDESK_PASSWORD)
TABLE = sys.argv[1] if len(sys.argv) > 1 else "Clients"


# Small caller-side retry helper; the SDK itself never retries
def with_retry(op, *, attempts=4):
    for attempt in range(1, attempts + 1):
        try:
            return op()
        except RateLimitError as ex:
            if attempt == attempts:
                raise
            delay = ex.retry_after if ex.retry_after is not None else 2**attempt
            print(f"Rate limited; sleeping {delay}s")
            time.sleep(delay)
        except ServerError as ex:
            if attempt == attempts:
                raise
            print(f"Server error ({ex.status_code}); retrying")
            time.sleep(2**attempt)


with TeamDeskClient.from_env() as client:
    print("Schema:")
    schema = with_retry(lambda: client.table(TABLE).describe())
    print({"table": schema.name, "columns": schema.column_names})

    print("First 10 records:")
    first = with_retry(lambda: client.table(TABLE).select().limit(10).execute())
    for record in first:
        print(record.id, record.to_dict())

    print("Walking the whole table:")
    total = 0
    for page in client.table(TABLE).select().select_all():
        total += len(page)
        print(f"  page of {len(page)} (running total {total})")

    print("Create:")
    try:
        results = client.table(TABLE).create([{schema.column_names[0]: "SDK quickstart"}], workflow=False)
        for result in results:
            print({"success": result.success, "status": result.status, "id": result.id})
            for err in result.errors:
                print("  ", err)
    except ValidationError as ex:
        print("Rejected:", [str(e) for e in ex.errors])
    except TeamDeskError as ex:
        print("Failed:", ex.to_dict())

    print("Cached fetch:")
    cached = client.fetch_with_cache(f"{TABLE.lower()}_all", lambda: list(client.table(TABLE).select().iter_records()))
    if cached.from_cache:
        print(f"API unavailable, using data from {cached.cache_age:.0f} minutes ago")
    print(f"{len(cached.data)} records")
