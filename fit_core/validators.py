from __future__ import annotations
from collections import Counter
from typing import Dict, List, Optional
from .types import Question, QuestionBank


class ValidationError(ValueError):
    """Raised for answers outside a question's options and for malformed banks."""


def validate_answer(question: Question, value: object) -> str:
    v = "" if value is None else str(value).strip()
    allowed = question.option_values()
    if v not in allowed:
        raise ValidationError(
            f"{v!r} is not a valid option for {question.id} (expected one of {', '.join(allowed)})"
        )
    return v


def likert_value(raw: Optional[str]) -> Optional[int]:
    if raw is None: return None
    try: v = int(str(raw).strip())
    except (TypeError, ValueError): return None
    return v if 1 <= v <= 5 else None


def audit_bank(bank: QuestionBank, strict: bool = False) -> Dict[str, List[str]]:
    """
    Checks id uniqueness, category tags and the technical answer key.
    Returns {section: [issue, ...]}; with strict=True the first problem raises.
    """
    from .question_bank import CATEGORIES
    issues: Dict[str, List[str]] = {}
    for section, allowed in CATEGORIES.items():
        found: List[str] = []
        questions = bank.section(section)
        dupes = [qid for qid, n in Counter(q.id for q in questions).items() if n > 1]
        for qid in dupes:
            found.append(f"duplicate id {qid}")
        for q in questions:
            if q.category not in allowed:
                found.append(f"{q.id}: unknown category {q.category!r}")
            if section == "technical":
                n_correct = sum(1 for o in q.options if o.is_correct)
                if n_correct != 1:
                    found.append(f"{q.id}: expected exactly one correct option, found {n_correct}")
            if not q.options:
                found.append(f"{q.id}: no options")
        issues[section] = found
        if strict and found:
            raise ValidationError(f"{section} bank: {found[0]}")
    return issues
