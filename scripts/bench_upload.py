#!/usr/bin/env python3
"""Benchmark manuscript upload and segmentation: throughput (manuscripts/s) and latency.

Usage:
  export API_URL=http://localhost:8000 KEYCLOAK_URL=http://localhost:8080
  export KEYCLOAK_REALM=quire KEYCLOAK_CLIENT_ID=quire-api KEYCLOAK_CLIENT_SECRET=quire-api-secret
  export BENCH_USER=testuser BENCH_PASSWORD=testpass
  python scripts/bench_upload.py [--num-manuscripts 20] [--chapters 10] [--paragraphs 20]
"""

import argparse
import os
import statistics
import sys
import time

import httpx


def get_token(
    keycloak_url: str,
    realm: str,
    client_id: str,
    client_secret: str,
    username: str,
    password: str,
) -> str:
    url = f"{keycloak_url.rstrip('/')}/realms/{realm}/protocol/openid-connect/token"
    r = httpx.post(
        url,
        data={
            "grant_type": "password",
            "client_id": client_id,
            "client_secret": client_secret,
            "username": username,
            "password": password,
        },
        headers={"Content-Type": "application/x-www-form-urlencoded"},
        timeout=30.0,
    )
    r.raise_for_status()
    return r.json()["access_token"]


def build_manuscript(chapters: int, paragraphs: int) -> str:
    """Markdown with `chapters` ### headings, each followed by `paragraphs` paragraphs."""
    parts = ["# Benchmark manuscript"]
    for c in range(chapters):
        parts.append(f"### Chapter {c + 1}")
        for p in range(paragraphs):
            parts.append(f"Paragraph {p + 1} of chapter {c + 1}. " + "Lorem ipsum dolor sit amet. " * 8)
    return "\n\n".join(parts)


def main() -> int:
    parser = argparse.ArgumentParser(description="Benchmark manuscript upload")
    parser.add_argument("--num-manuscripts", type=int, default=20, help="Number of manuscripts to upload")
    parser.add_argument("--chapters", type=int, default=10, help="Chapters per manuscript")
    parser.add_argument("--paragraphs", type=int, default=20, help="Paragraphs per chapter")
    parser.add_argument("--keep", action="store_true", help="Do not delete uploaded manuscripts")
    parser.add_argument("--output", type=str, default="results/bench_upload.txt", help="Output file path")
    args = parser.parse_args()

    api_url = os.environ.get("API_URL", "http://localhost:8000").rstrip("/")
    keycloak_url = os.environ.get("KEYCLOAK_URL", "http://localhost:8080")
    realm = os.environ.get("KEYCLOAK_REALM", "quire")
    client_id = os.environ.get("KEYCLOAK_CLIENT_ID", "quire-api")
    client_secret = os.environ.get("KEYCLOAK_CLIENT_SECRET", "quire-api-secret")
    user = os.environ.get("BENCH_USER", "testuser")
    password = os.environ.get("BENCH_PASSWORD", "testpass")

    print("Getting token...")
    token = get_token(keycloak_url, realm, client_id, client_secret, user, password)
    headers = {"Authorization": f"Bearer {token}", "Content-Type": "application/json"}

    markdown = build_manuscript(args.chapters, args.paragraphs)
    expected_chunks = args.chapters * args.paragraphs
    latencies: list[float] = []
    created: list[str] = []
    errors = 0

    print(
        f"Uploading {args.num_manuscripts} manuscripts "
        f"({expected_chunks} chunks, {len(markdown)} chars each)..."
    )
    start_total = time.perf_counter()
    with httpx.Client(timeout=120.0) as client:
        for i in range(args.num_manuscripts):
            t0 = time.perf_counter()
            r = client.post(
                f"{api_url}/v1/manuscripts",
                json={"title": f"Benchmark {i}", "markdown": markdown},
                headers=headers,
            )
            elapsed = time.perf_counter() - t0
            if r.status_code == 201 and r.json().get("chunk_count") == expected_chunks:
                latencies.append(elapsed)
                created.append(r.json()["id"])
            else:
                errors += 1
    total_elapsed = time.perf_counter() - start_total

    if not args.keep:
        with httpx.Client(timeout=60.0) as client:
            for manuscript_id in created:
                client.delete(f"{api_url}/v1/manuscripts/{manuscript_id}", headers=headers)

    n = len(latencies)
    if n == 0:
        print("No successful uploads.")
        return 1

    per_sec = n / total_elapsed
    chunks_per_sec = n * expected_chunks / total_elapsed
    p50 = statistics.median(latencies) * 1000
    p95 = sorted(latencies)[int(n * 0.95) - 1] * 1000 if n >= 20 else p50

    summary = (
        f"Upload benchmark (n={n}, errors={errors})\n"
        f"  Throughput: {per_sec:.2f} manuscripts/s, {chunks_per_sec:.1f} chunks/s\n"
        f"  Latency: p50={p50:.1f} ms, p95={p95:.1f} ms\n"
        f"  Total time: {total_elapsed:.2f} s\n"
    )
    print(summary)

    try:
        os.makedirs(os.path.dirname(args.output) or ".", exist_ok=True)
        with open(args.output, "w", encoding="utf-8") as f:
            f.write(summary)
        print(f"Wrote {args.output}")
    except OSError as e:
        print(f"Could not write {args.output}: {e}", file=sys.stderr)

    return 0


if __name__ == "__main__":
    sys.exit(main())
