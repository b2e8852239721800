#!/usr/bin/env python3
"""
Basic usage of the DynamoDB lookup library.

Looks up two items from the same table with one shared client, the way a
longer-running program would:
1. Build configuration (environment, or DynamoDB Local)
2. Open one client handle and reuse it for every lookup
3. Handle Found / NotFound / errors separately for each call

Usage:
    python examples/basic_usage.py HelloTable World Nobody
"""

import sys

from dynamodb_lookup import (
    DynamoDBClient,
    DynamoDBConfig,
    DynamoDBLookupError,
    Found,
    ItemFetcher,
    timed,
)


def print_elapsed(name: str, elapsed_us: int) -> None:
    print(f"{name} = {elapsed_us}[µs]")


def main():
    if len(sys.argv) < 3:
        print(__doc__)
        return 1

    table, names = sys.argv[1], sys.argv[2:]

    # For DynamoDB Local use DynamoDBConfig.for_local_development()
    config = DynamoDBConfig.from_env()

    with DynamoDBClient(config) as client:
        fetch = timed(ItemFetcher(client).fetch, on_elapsed=print_elapsed)

        for name in names:
            try:
                result = fetch(table, {"Name": name})
            except DynamoDBLookupError as e:
                print(f"Failed to get item: {e.message}")
                continue

            if isinstance(result, Found):
                for field, value in result.item.items():
                    print(f"{field}: {value}")
            else:
                print(f"No item found with the key {name}")

    return 0


if __name__ == "__main__":
    sys.exit(main())
