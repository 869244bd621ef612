# graph/state.py - Pair-counting evaluation state
from typing import TypedDict, List, Dict, Any, Optional


class EvaluationState(TypedDict, total=False):
    """LangGraph state for pair-counting evaluation of clustering results"""

    # Inputs - one label per object, aligned with object_ids (positions if absent)
    reference_labels: Optional[List[Any]]                # Ground-truth labels
    candidate_labels: Optional[Dict[str, List[Any]]]     # Candidate name -> labels
    object_ids: Optional[List[Any]]                      # Shared object identifiers
    noise_label: Optional[Any]                           # e.g. -1 for DBSCAN output

    # Policy flags (None -> settings defaults)
    noise_special_handling: Optional[bool]
    self_pairing: Optional[bool]

    # Outputs
    pair_counting_results: Optional[List[Dict[str, Any]]]  # One dict per candidate, input order

    # Stage tracking
    current_stage: Optional[str]
    error: Optional[str]


def initialize_evaluation_state(
    reference_labels: List[Any],
    candidate_labels: Dict[str, List[Any]],
    object_ids: Optional[List[Any]] = None,
    noise_label: Any = None,
    noise_special_handling: Optional[bool] = None,
    self_pairing: Optional[bool] = None,
) -> EvaluationState:
    """Create the initial state for an evaluation run"""
    return EvaluationState(
        reference_labels=list(reference_labels),
        candidate_labels={name: list(labels) for name, labels in candidate_labels.items()},
        object_ids=list(object_ids) if object_ids is not None else None,
        noise_label=noise_label,
        noise_special_handling=noise_special_handling,
        self_pairing=self_pairing,
        pair_counting_results=None,
        current_stage="INIT",
        error=None,
    )
