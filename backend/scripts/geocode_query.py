"""Geocode a single query from the command line.

Usage:
    python -m scripts.geocode_query "Paris, France" [--pretty]

Runs the same validation, upstream call and normalization as the HTTP
endpoint and prints the normalized result as JSON. Requires
GEOCACHE_API_KEY in the environment (or in backend/.env).
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import List, Optional

from dotenv import load_dotenv

ROOT = Path(__file__).resolve().parents[1]
load_dotenv(ROOT / ".env")

from api.routes.geocache import dump_result
from domain.errors import EmptyResult, GeocacheError
from domain.models import validate_query
from services.geocache_client import get_default_geocache_client
from services.normalizer import normalize

LOG = logging.getLogger("geocode_query")


def run(query: str) -> dict:
    trimmed = validate_query(query)
    client = get_default_geocache_client()
    result = normalize(client.geocode(trimmed), trimmed)
    if result is None:
        raise EmptyResult()
    return dump_result(result)


def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(description="Geocode a free-text location query")
    parser.add_argument("query", help="location text to geocode")
    parser.add_argument("--pretty", action="store_true", help="indent the JSON output")
    args = parser.parse_args(argv)

    logging.basicConfig(level=logging.INFO)
    try:
        data = run(args.query)
    except GeocacheError as exc:
        LOG.error("Geocode failed (%s): %s", exc.status_code, exc.public_message)
        return 2
    except Exception:
        LOG.exception("Geocode failed")
        return 2

    print(json.dumps(data, indent=2 if args.pretty else None))
    return 0


if __name__ == "__main__":
    sys.exit(main())
