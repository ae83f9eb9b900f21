#!/usr/bin/env python3
"""
Smoke test: run one live demo N times in parallel against a running server.

Every run must answer HTTP 200 with the same state; a run that fails to
compile is reported in the body (state "compiled_with_error"), not as an
HTTP error.

Usage:
  python scripts/smoke_concurrent.py [--base-url URL] [--demo ID] [--concurrent N]
  Or set env: LIVEDEMO_URL, DEMO_ID, CONCURRENT
"""

import argparse
import os
import sys
from collections import Counter
from concurrent.futures import ThreadPoolExecutor, as_completed

import requests


def do_run(base_url: str, demo_id: str, index: int) -> tuple[int, int, str]:
    """POST one run; return (index, status_code, state)."""
    try:
        r = requests.post(f"{base_url}/demos/{demo_id}/run", timeout=30)
    except requests.RequestException:
        return (index, -1, "")
    state = r.json().get("state", "") if r.status_code == 200 else ""
    return (index, r.status_code, state)


def main() -> None:
    parser = argparse.ArgumentParser(description="Run a live demo with N parallel requests.")
    parser.add_argument(
        "--base-url",
        default=os.environ.get("LIVEDEMO_URL", "http://localhost:8000/api/v1"),
        help="API base URL (default http://localhost:8000/api/v1)",
    )
    parser.add_argument(
        "--demo",
        default=os.environ.get("DEMO_ID", "contact-form"),
        help="Demo id to run (default contact-form)",
    )
    parser.add_argument(
        "--concurrent",
        type=int,
        default=int(os.environ.get("CONCURRENT", "20")),
        help="Number of concurrent runs (default 20)",
    )
    args = parser.parse_args()

    print(f"Running demo {args.demo!r} {args.concurrent}x concurrently at {args.base_url}")
    print("---")

    results: list[tuple[int, int, str]] = []
    with ThreadPoolExecutor(max_workers=args.concurrent) as executor:
        futures = [executor.submit(do_run, args.base_url, args.demo, i) for i in range(1, args.concurrent + 1)]
        for fut in as_completed(futures):
            idx, code, state = fut.result()
            results.append((idx, code, state))
            code_str = str(code) if code >= 0 else "ERR"
            print(f"{idx} HTTP {code_str} {state}")

    print("---")
    codes = Counter(code for _, code, _ in results)
    states = Counter(state for _, code, state in results if code == 200)
    print(f"Done. status={dict(codes)} states={dict(states)}")
    if set(codes) != {200} or len(states) != 1:
        sys.exit(1)


if __name__ == "__main__":
    main()
