from __future__ import annotations
from dataclasses import asdict, dataclass, field
from typing import Dict, List, Optional, Tuple, Literal

SectionName = Literal["psychometric", "technical", "wiscar"]
Tier = Literal["Yes", "Maybe", "Consider Alternatives"]


@dataclass(frozen=True)
class Option:
    value: str; label: str
    is_correct: bool = False


@dataclass(frozen=True)
class Question:
    id: str; section: SectionName; category: str; text: str
    options: Tuple[Option, ...] = ()
    construct: Optional[str] = None
    dimension_name: Optional[str] = None

    def option_values(self) -> Tuple[str, ...]:
        return tuple(o.value for o in self.options)

    def correct_value(self) -> Optional[str]:
        return next((o.value for o in self.options if o.is_correct), None)


@dataclass(frozen=True)
class QuestionBank:
    psychometric: Tuple[Question, ...]
    technical: Tuple[Question, ...]
    wiscar: Tuple[Question, ...]

    def section(self, name: str) -> Tuple[Question, ...]:
        if name not in ("psychometric", "technical", "wiscar"):
            raise KeyError(name)
        return getattr(self, name)


@dataclass(frozen=True)
class PsychometricScore:
    psychometric_fit: float
    categories: Dict[str, float] = field(default_factory=dict)

    def as_dict(self) -> Dict[str, float]:
        return {"psychometricFit": self.psychometric_fit, **self.categories}


@dataclass(frozen=True)
class TechnicalScore:
    technical_readiness: float
    aptitude_score: float
    prerequisite_score: float
    domain_score: float

    def as_dict(self) -> Dict[str, float]:
        return {
            "technicalReadiness": self.technical_readiness,
            "aptitudeScore": self.aptitude_score,
            "prerequisiteScore": self.prerequisite_score,
            "domainScore": self.domain_score,
        }


@dataclass(frozen=True)
class WiscarScore:
    overall_confidence: float
    dimensions: Dict[str, float] = field(default_factory=dict)

    def as_dict(self) -> Dict[str, float]:
        out = {f"{dim.lower()}Score": val for dim, val in self.dimensions.items()}
        out["overallConfidence"] = self.overall_confidence
        return out


@dataclass(frozen=True)
class ResultScore:
    """Union of the three section records; absent values read as 0."""
    psychometric_fit: float = 0.0
    technical_readiness: float = 0.0
    overall_confidence: float = 0.0
    w_score: float = 0.0
    i_score: float = 0.0
    s_score: float = 0.0
    c_score: float = 0.0
    a_score: float = 0.0
    r_score: float = 0.0
    aptitude_score: float = 0.0
    prerequisite_score: float = 0.0
    domain_score: float = 0.0
    categories: Dict[str, float] = field(default_factory=dict)

    @classmethod
    def merge(
        cls,
        psychometric: Optional[PsychometricScore] = None,
        technical: Optional[TechnicalScore] = None,
        wiscar: Optional[WiscarScore] = None,
    ) -> "ResultScore":
        kw: Dict[str, object] = {}
        if psychometric is not None:
            kw["psychometric_fit"] = psychometric.psychometric_fit
            kw["categories"] = dict(psychometric.categories)
        if technical is not None:
            kw["technical_readiness"] = technical.technical_readiness
            kw["aptitude_score"] = technical.aptitude_score
            kw["prerequisite_score"] = technical.prerequisite_score
            kw["domain_score"] = technical.domain_score
        if wiscar is not None:
            kw["overall_confidence"] = wiscar.overall_confidence
            for dim, val in wiscar.dimensions.items():
                kw[f"{dim.lower()}_score"] = val
        return cls(**kw)  # type: ignore[arg-type]

    def as_dict(self) -> Dict[str, float]:
        return {
            "psychometricFit": self.psychometric_fit,
            "technicalReadiness": self.technical_readiness,
            "overallConfidence": self.overall_confidence,
            "wScore": self.w_score, "iScore": self.i_score, "sScore": self.s_score,
            "cScore": self.c_score, "aScore": self.a_score, "rScore": self.r_score,
        }


@dataclass(frozen=True)
class DimensionRow:
    dimension: str; name: str; score: float


@dataclass(frozen=True)
class JobMatch:
    title: str; match: float; description: str
    badge: Literal["strong", "fair", "weak"]


@dataclass(frozen=True)
class LearningStage:
    step: int; title: str; topics: Tuple[str, ...]


@dataclass(frozen=True)
class ResultsView:
    tier: Tier
    message: str
    average: float
    confidence_percent: int
    scores: Dict[str, float]
    dimension_breakdown: List[DimensionRow]
    job_matches: List[JobMatch]
    learning_path: List[LearningStage]

    def as_dict(self) -> Dict[str, object]:
        return asdict(self)
