"""
Pydantic schemas for pair-counting evaluation configuration and results.
Score fields are listed in the canonical reporting order.
"""
from collections import OrderedDict
from typing import Any, Dict, List, Literal, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, computed_field


# ========== Configuration ==========
class PairCountingConfig(BaseModel):
    """Policy knobs fixed at evaluator construction"""
    model_config = ConfigDict(frozen=True)

    noise_special_handling: bool = Field(
        default=False,
        description="Never credit pairs touching a noise class as true positives",
    )
    self_pairing: bool = Field(
        default=True,
        description="Count each object paired with itself as an agreeing pair",
    )
    max_workers: int = Field(default=1, ge=1, description="Threads used to score candidates")

    @classmethod
    def from_settings(cls, settings=None) -> "PairCountingConfig":
        """Build the configuration from environment-backed settings."""
        if settings is None:
            from .config import settings
        return cls(
            noise_special_handling=settings.PAIRCOUNTING_NOISE_SPECIAL,
            self_pairing=settings.PAIRCOUNTING_SELF_PAIRING,
            max_workers=settings.PAIRCOUNTING_MAX_WORKERS,
        )


# ========== Pair Counts ==========
class PairCounts(BaseModel):
    """The four pair-agreement counts and the size of the pair universe"""
    model_config = ConfigDict(frozen=True)

    a: int = Field(description="Pairs in the same class under both partitions")
    b: int = Field(description="Same class under A, different classes under B")
    c: int = Field(description="Different classes under A, same class under B")
    d: int = Field(description="Different classes under both partitions")
    total: int = Field(description="Number of pairs considered")

    @computed_field
    @property
    def disagreements(self) -> int:
        return self.b + self.c


# ========== Scores ==========
# (attribute, display name) in canonical reporting order
SCORE_FIELDS: Tuple[Tuple[str, str], ...] = (
    ("f1", "F1-Measure"),
    ("precision", "Precision"),
    ("recall", "Recall"),
    ("rand", "Rand"),
    ("adjusted_rand", "AdjustedRand"),
    ("fowlkes_mallows", "FowlkesMallows"),
    ("jaccard", "Jaccard"),
    ("mirkin", "Mirkin"),
)


class PairCountingScores(BaseModel):
    """Eight pair-counting agreement indices. NaN marks an undefined ratio."""
    model_config = ConfigDict(frozen=True)

    f1: float
    precision: float
    recall: float
    rand: float
    adjusted_rand: float
    fowlkes_mallows: float
    jaccard: float
    mirkin: float
    pair_counts: PairCounts

    def as_ordered_dict(self) -> "OrderedDict[str, float]":
        """Display name -> value in canonical order."""
        return OrderedDict((display, getattr(self, attr)) for attr, display in SCORE_FIELDS)

    def values(self) -> List[float]:
        return [getattr(self, attr) for attr, _ in SCORE_FIELDS]


# ========== Evaluation Result ==========
class EvaluationResult(BaseModel):
    """Result bundle of one candidate-vs-reference comparison"""
    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    candidate_index: int
    candidate_name: Optional[str] = None
    status: Literal["completed", "failed"] = "completed"
    scores: Optional[PairCountingScores] = None
    table: Optional[Any] = Field(default=None, description="ContingencyTable of the comparison")
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.status == "completed"

    def summary(self) -> Dict[str, Any]:
        """Flat row of scores and counts, without the table."""
        row: Dict[str, Any] = {
            "candidate_index": self.candidate_index,
            "candidate_name": self.candidate_name,
            "status": self.status,
        }
        if self.scores is not None:
            row.update(self.scores.as_ordered_dict())
            row.update(self.scores.pair_counts.model_dump())
        row["error"] = self.error
        return row
