"""
Smoke Test - Owner Isolation Against a Running Backend

Tests:
1. Mint dev tokens for two users (A and B)
2. Create one row of every resource as A
3. Verify B's lists and stats are empty
4. Verify B cannot update/delete A's rows (404)
5. Verify requests without a token are rejected (401)
6. Clean up A's rows

Run: python smoke_test_isolation.py [BASE_URL]

Requirements:
- Backend running with ENV=dev (default http://localhost:8000)
"""

import sys
from typing import Dict, List, Optional, Tuple

import requests

from holdings_api.sample_bodies import RESOURCE_PATHS, VALID_BODIES

BASE_URL = sys.argv[1].rstrip("/") if len(sys.argv) > 1 else "http://localhost:8000"


class TestResult:
    def __init__(self):
        self.passed = 0
        self.failed = 0

    def check(self, ok: bool, name: str, detail: str = "") -> bool:
        if ok:
            self.passed += 1
            print(f"PASS: {name}")
        else:
            self.failed += 1
            print(f"FAIL: {name}")
            if detail:
                print(f"  -> {detail}")
        return ok

    def summary(self) -> bool:
        print("\n" + "=" * 60)
        print(f"SMOKE TEST SUMMARY: {self.passed} passed, {self.failed} failed")
        print("=" * 60)
        return self.failed == 0


def dev_headers(user_id: str) -> Optional[Dict[str, str]]:
    resp = requests.post(f"{BASE_URL}/auth/dev-token", json={"userId": user_id}, timeout=10)
    if resp.status_code != 200:
        print(f"Could not mint dev token for {user_id}: HTTP {resp.status_code} {resp.text[:200]}")
        return None
    return {"Authorization": f"Bearer {resp.json()['access_token']}"}


def main() -> int:
    results = TestResult()

    headers_a = dev_headers("smoke-user-a")
    headers_b = dev_headers("smoke-user-b")
    if not headers_a or not headers_b:
        print("Is the backend running with ENV=dev?")
        return 1

    created: List[Tuple[str, str]] = []
    for path in RESOURCE_PATHS:
        resp = requests.post(f"{BASE_URL}{path}", json=VALID_BODIES[path], headers=headers_a, timeout=10)
        if results.check(resp.status_code == 201, f"A creates {path}", resp.text[:200]):
            created.append((path, resp.json()["id"]))

    for path, row_id in created:
        rows_b = requests.get(f"{BASE_URL}{path}", headers=headers_b, timeout=10).json()
        results.check(all(row["id"] != row_id for row in rows_b), f"B cannot list A's {path} row")

        resp = requests.put(
            f"{BASE_URL}{path}", params={"id": row_id}, json=VALID_BODIES[path], headers=headers_b, timeout=10
        )
        results.check(resp.status_code == 404, f"B update of A's {path} row is 404", f"got {resp.status_code}")

        resp = requests.delete(f"{BASE_URL}{path}", params={"id": row_id}, headers=headers_b, timeout=10)
        results.check(resp.status_code == 404, f"B delete of A's {path} row is 404", f"got {resp.status_code}")

    stats_b = requests.get(f"{BASE_URL}/api/stats", headers=headers_b, timeout=10).json()
    results.check(sum(stats_b.values()) == 0, "B's stats are empty", str(stats_b))

    resp = requests.get(f"{BASE_URL}/api/analytics", timeout=10)
    results.check(resp.status_code == 401, "Analytics without token is 401", f"got {resp.status_code}")

    for path, row_id in created:
        resp = requests.delete(f"{BASE_URL}{path}", params={"id": row_id}, headers=headers_a, timeout=10)
        results.check(resp.status_code == 200, f"A deletes own {path} row", f"got {resp.status_code}")

    return 0 if results.summary() else 1


if __name__ == "__main__":
    sys.exit(main())
