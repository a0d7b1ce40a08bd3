from __future__ import annotations
import os, json, pathlib


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "on"}


def _env_float(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return float(raw.strip())
    except ValueError:
        return default


LIKERT_MAX: int = 5

TIER_YES_MIN: float = 75.0
TIER_MAYBE_MIN: float = 50.0

MATCH_STRONG_MIN: float = 70.0
MATCH_FAIR_MIN: float = 50.0

# overall value reported when a Likert section has no scorable answers
EMPTY_SECTION_SCORE: float = 0.0

STRICT_ANSWERS: bool = True
AUDIT_EXPORT_ENABLED: bool = True

TOTAL_STEPS: int = 4

DEBUG_TRACE: bool = False
TRACE_FIELDS: tuple[str, ...] = (
    "intent",
    "stage_before",
    "stage_after",
    "question_id",
    "value",
    "index",
)
# // env overrides for staging/ops; defaults match the published thresholds.
TIER_YES_MIN = _env_float("TIER_YES_MIN", TIER_YES_MIN)
TIER_MAYBE_MIN = _env_float("TIER_MAYBE_MIN", TIER_MAYBE_MIN)
MATCH_STRONG_MIN = _env_float("MATCH_STRONG_MIN", MATCH_STRONG_MIN)
MATCH_FAIR_MIN = _env_float("MATCH_FAIR_MIN", MATCH_FAIR_MIN)
STRICT_ANSWERS = _env_bool("STRICT_ANSWERS", STRICT_ANSWERS)
AUDIT_EXPORT_ENABLED = _env_bool("AUDIT_EXPORT_ENABLED", AUDIT_EXPORT_ENABLED)
DEBUG_TRACE = _env_bool("DEBUG_TRACE", False)


def load_config() -> dict:
    cfg = {}
    p = pathlib.Path("config.json")
    if p.exists():
        try: cfg = json.loads(p.read_text(encoding="utf-8"))
        except (OSError, ValueError): cfg = {}
    e = os.environ
    if e.get("BANK_PATH"): cfg["BANK_PATH"] = e.get("BANK_PATH")
    if e.get("STRICT_ANSWERS"): cfg["STRICT_ANSWERS"] = _env_bool("STRICT_ANSWERS", True)
    cfg.setdefault("STRICT_ANSWERS", STRICT_ANSWERS)
    return cfg
