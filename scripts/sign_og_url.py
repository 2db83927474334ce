from __future__ import annotations

import argparse
import os
import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from app.utils.security import build_signed_query


def _parse_pair(raw: str) -> tuple[str, str]:
    key, sep, value = raw.partition("=")
    if not sep or not key:
        raise argparse.ArgumentTypeError(f"expected key=value, got {raw!r}")
    return key, value


def main() -> int:
    parser = argparse.ArgumentParser(description="Print a signed OG image URL")
    parser.add_argument("params", nargs="*", type=_parse_pair, help="query parameters as key=value")
    parser.add_argument("--base-url", default="http://localhost:8000/api/og")
    parser.add_argument("--secret", default=os.getenv("OG_SIGNATURE_SECRET", ""))
    args = parser.parse_args()

    if not args.secret:
        print("error: pass --secret or set OG_SIGNATURE_SECRET", file=sys.stderr)
        return 2

    print(f"{args.base_url}?{build_signed_query(args.params, args.secret)}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
