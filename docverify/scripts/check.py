# docverify/scripts/check.py
import argparse
import json
import sys
from dataclasses import asdict
from docverify.config import settings
from docverify.db import SessionLocal
from docverify.errors import VerificationError
from docverify.matcher import FIELD_ORDER, ClaimedIdentity, Matcher
from docverify.records import SqlRecordLookup

def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="python -m docverify.scripts.check",
        description="Verify a claimed identity against the employee records",
    )
    parser.add_argument("employee_id", help="Employee ID (lookup key)")
    for name, attr in FIELD_ORDER:
        parser.add_argument(f"--{name}", dest=attr, metavar="VALUE")
    return parser

def parse_args(argv) -> ClaimedIdentity:
    args = build_parser().parse_args(argv)
    return ClaimedIdentity(**vars(args))

def main(argv) -> int:
    claim = parse_args(argv)  # argparse exits with 2 on usage errors
    db = SessionLocal()
    try:
        result = Matcher(SqlRecordLookup(db), threshold=settings.verify_threshold).verify(claim)
    except VerificationError as e:
        print(f"error: {e.message}", file=sys.stderr)
        return 2
    finally:
        db.close()
    out = asdict(result)
    out.pop("record", None)
    print(json.dumps(out, indent=2, default=str))
    return 0 if result.verified else 1

if __name__ == "__main__":
    sys.exit(main(sys.argv[1:]))
