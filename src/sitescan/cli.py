from __future__ import annotations

import argparse
import json
import logging
import sys

from .extract import DEFAULT_TIMEOUT
from .scan import scan_url


def main(argv=None):
    parser = argparse.ArgumentParser(
        prog="site-scan",
        description="Scan a web page, score its page quality, and compute SALT anchor scores.",
    )
    parser.add_argument("url", help="Page URL to scan (e.g., https://example.com)")
    parser.add_argument("--json", dest="as_json", action="store_true", help="Output JSON report to stdout")
    parser.add_argument("--facts", action="store_true", help="Print the labeled fact block instead of the report")
    parser.add_argument(
        "--timeout",
        type=float,
        default=DEFAULT_TIMEOUT,
        help=f"Seconds to wait for the page fetch (default: {DEFAULT_TIMEOUT})",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        result = scan_url(args.url, timeout=args.timeout)
    except ValueError as e:
        print(f"error: {e}", file=sys.stderr)
        return 2

    exit_code = 1 if result.degraded else 0

    if args.as_json:
        print(json.dumps(result.to_dict(), indent=2))
        return exit_code

    if args.facts:
        print(result.facts)
        return exit_code

    # Human-readable output
    s = result.signals
    report = result.report
    if result.error:
        print(f"Scan failed, scores use unknown signals: {result.error}")
    print(f"Page Quality Score: {report.score}/100 ({report.bucket})")
    print(f"URL: {s.final_url}")
    print(f"  Status: {s.http_status if s.http_status is not None else 'unknown'}")
    print(f"  Title: {s.title or '(missing)'}")
    print(f"  Words (main content): {s.main_content_word_count if s.main_content_word_count is not None else 'unknown'}")
    print(f"  Purpose: {s.purpose_guess or 'unknown'}")
    print(f"  YMYL risk: {s.ymyl_risk or 'unknown'}")

    print("\nSALT anchor:")
    for k, v in result.anchor.to_dict().items():
        print(f"  - {k}: {v}")

    if report.positives:
        print("\nPositives:")
        for p in report.positives:
            print(f"  + {p}")

    if report.red_flags:
        print("\nRed flags:")
        for r in report.red_flags:
            print(f"  - {r}")

    return exit_code


if __name__ == "__main__":
    raise SystemExit(main())
