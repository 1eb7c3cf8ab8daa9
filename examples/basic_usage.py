#!/usr/bin/env python3
"""
Basic ghdash usage example.

Loads a dashboard twice against the mock client (the second load is served
from the cache) and prints the summary a renderer would draw.
Run with: python examples/basic_usage.py
"""

import asyncio
from datetime import date

from ghdash import DashboardError, DashboardLoader, NotFoundError, TTLCache
from ghdash.stats import activity_summary, format_number, language_breakdown, total_stars
from ghdash.storage import MemoryStore
from ghdash.testing import MockGitHubClient, create_mock_calendar, create_mock_repo

print("=== ghdash Basic Usage Example ===\n")

# 1. Exception hierarchy
print("1. Testing exception classes...")
try:
    raise NotFoundError()
except DashboardError as e:
    print(f"   Caught DashboardError: {e}")
    print(f"   Code: {e.code}, Message: {e.message}")

print("\n   OK: Exception classes working\n")


async def main() -> None:
    # 2. Loading through the cache
    print("2. Loading a dashboard...")
    client = MockGitHubClient(token="demo-token")
    client.configure_get_all_repos(
        [
            create_mock_repo("api", language="Go", stargazers_count=1200, size=800),
            create_mock_repo("site", language="TypeScript", stargazers_count=40, size=300),
            create_mock_repo("notebooks", language="Jupyter Notebook", size=150),
        ]
    )
    client.configure_get_contributions(
        create_mock_calendar({date(2024, 1, 30): 3, date(2024, 1, 31): 9})
    )

    loader = DashboardLoader(client, TTLCache(MemoryStore()), today=lambda: date(2024, 1, 31))
    snapshot = await loader.load("octocat")
    await loader.load("octocat")
    print(f"   get_user calls after two loads: {client.call_count('get_user')}")

    # 3. Presentation helpers
    print("\n3. Summary...")
    print(f"   Stars: {format_number(total_stars(snapshot.repos))}")
    for share in language_breakdown(snapshot.repos):
        print(f"   {share.language:<18} {share.percent:5.1f}%  {share.color}")
    activity = activity_summary(snapshot.events)
    print(f"   Events: {activity.total_events}, commits: {activity.total_commits}")

    # 4. Heatmap
    heatmap = snapshot.heatmap
    print("\n4. Heatmap...")
    print(f"   {heatmap.total} contributions ({'exact' if heatmap.is_exact else 'approximate'})")
    print(f"   {heatmap.columns} columns from {heatmap.start} to {heatmap.end}")
    print(f"   Months: {' '.join(label.text for label in heatmap.month_labels)}")
    print(f"   Last week levels: {[cell.level for cell in heatmap.cells[-7:]]}")


asyncio.run(main())

print("\n=== Example complete ===")
