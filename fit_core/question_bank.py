from __future__ import annotations
import json, importlib.resources as ir
from pathlib import Path
from typing import Dict, List, Optional, Tuple
from .types import Option, Question, QuestionBank

SECTIONS = ["psychometric", "technical", "wiscar"]
PSYCHOMETRIC_CATEGORIES = ["interest", "personality", "motivation", "cognitive"]
TECHNICAL_TYPES = ["aptitude", "prerequisite", "domain"]
WISCAR_DIMENSIONS = ["W", "I", "S", "C", "A", "R"]
WISCAR_NAMES: Dict[str, str] = {
    "W": "Will", "I": "Interest", "S": "Skill",
    "C": "Cognitive", "A": "Ability to Learn", "R": "Real-World Alignment",
}
CATEGORIES: Dict[str, List[str]] = {
    "psychometric": PSYCHOMETRIC_CATEGORIES,
    "technical": TECHNICAL_TYPES,
    "wiscar": WISCAR_DIMENSIONS,
}
LIKERT_OPTIONS: Tuple[Option, ...] = (
    Option("1", "Strongly Disagree"),
    Option("2", "Disagree"),
    Option("3", "Neutral"),
    Option("4", "Agree"),
    Option("5", "Strongly Agree"),
)


def _question(section: str, r: dict) -> Question:
    if section == "technical":
        opts = tuple(
            Option(str(o["value"]), str(o["label"]), bool(o.get("correct", False)))
            for o in r.get("options", [])
        )
    else:
        opts = LIKERT_OPTIONS
    category = r.get("category") or r.get("type") or r.get("dimension") or ""
    dim_name = r.get("dimension_name")
    if section == "wiscar" and not dim_name:
        dim_name = WISCAR_NAMES.get(category)
    return Question(
        id=str(r["id"]), section=section, category=str(category), text=str(r["text"]),
        options=opts, construct=r.get("construct"), dimension_name=dim_name,
    )


def bank_from_dict(raw: dict, audit: bool = True) -> QuestionBank:
    from .validators import audit_bank
    bank = QuestionBank(**{s: tuple(_question(s, r) for r in raw.get(s, [])) for s in SECTIONS})
    if audit:
        audit_bank(bank, strict=True)
    return bank


def load_bank(path: Optional[str] = None, audit: bool = True) -> QuestionBank:
    if path:
        data = Path(path).read_text(encoding="utf-8")
    else:
        data = ir.files(__package__).joinpath("data/bank.json").read_text(encoding="utf-8")
    return bank_from_dict(json.loads(data), audit=audit)
