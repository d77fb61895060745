"""Fetch and print the payment audit trail for one reference number."""

import argparse
import json

import httpx


def main() -> None:
    """CLI entrypoint for audit trail lookups."""

    parser = argparse.ArgumentParser(description="Fetch payment logs and response items for a reference number.")
    parser.add_argument("reference_number")
    parser.add_argument("--audit-url", default="http://localhost:8010")
    parser.add_argument("--logs-only", action="store_true")
    args = parser.parse_args()

    base = f"{args.audit_url}/payment-infos/{args.reference_number}"
    report = {}
    resp = httpx.get(f"{base}/logs", timeout=10.0)
    resp.raise_for_status()
    report["logs"] = resp.json()
    if not args.logs_only:
        resp = httpx.get(f"{base}/response-items", timeout=10.0)
        resp.raise_for_status()
        report["response_items"] = resp.json()
    print(json.dumps(report, indent=2))


if __name__ == "__main__":
    main()
