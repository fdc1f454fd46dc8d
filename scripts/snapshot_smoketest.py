from __future__ import annotations

import sys
import tempfile
from pathlib import Path

# Allow running as: python scripts/snapshot_smoketest.py
REPO_ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(REPO_ROOT))

from fastapi.testclient import TestClient

from app.main import create_app
from app.settings import Settings


def main() -> int:
    with tempfile.TemporaryDirectory() as tmp:
        settings = Settings(database_path=str(Path(tmp) / "database.json"))

        c = TestClient(create_app(settings))
        r = c.post("/records", json={"id": 1, "name": "hw1", "complete": False})
        print("/records(post)", r.status_code)
        r = c.post("/forex_pairs", json={"id": 1, "pair": "EUR/USD", "price": 1.08})
        print("/forex_pairs(post)", r.status_code)

        # Second app on the same snapshot = restarted process.
        c = TestClient(create_app(settings))
        r = c.get("/records/1")
        print("/records/1(after restart)", r.status_code, r.json() if r.status_code == 200 else "")
        if r.status_code != 200:
            return 1
        r = c.get("/forex_pairs")
        print("/forex_pairs(after restart)", r.status_code, r.json())

    return 0


if __name__ == "__main__":
    raise SystemExit(main())
