from __future__ import annotations
from collections import Counter
import argparse, sys
from fit_core.question_bank import CATEGORIES, load_bank
from fit_core.validators import audit_bank


def main(argv=None) -> int:
    ap = argparse.ArgumentParser()
    ap.add_argument("--bank", default=None, help="path to a bank.json (defaults to the bundled bank)")
    a = ap.parse_args(argv)
    # load unaudited so every problem is listed, not just the first
    bank = load_bank(a.bank, audit=False)

    issues = audit_bank(bank)
    for section, allowed in CATEGORIES.items():
        qs = bank.section(section)
        per_cat = Counter(q.category for q in qs)
        cats = "  ".join(f"{c}={per_cat.get(c, 0)}" for c in allowed)
        print(f"{section}: {len(qs)} questions | {cats}")
        empty = [c for c in allowed if not per_cat.get(c)]
        if empty:
            print(f"  → no questions for: {', '.join(empty)} (scored as absent)")
        for msg in issues.get(section, []):
            print(f"  ✗ {msg}")
        if not issues.get(section) and not empty:
            print("  ✓ OK")
    return 1 if any(issues.values()) else 0


if __name__ == "__main__":
    sys.exit(main())
