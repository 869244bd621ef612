# graph/graph.py - Pair-counting evaluation workflow
from typing import Any, Dict, List, Optional

from langgraph.graph import StateGraph, START, END

from config.config import configure_logging
from graph.state import EvaluationState, initialize_evaluation_state
from nodes.evaluation_node import pair_counting_evaluation_node


def create_evaluation_workflow():
    """Build and compile the evaluation graph: START -> pair_counting_evaluation -> END"""
    workflow = StateGraph(EvaluationState)

    workflow.add_node("pair_counting_evaluation", pair_counting_evaluation_node)

    workflow.add_edge(START, "pair_counting_evaluation")
    workflow.add_edge("pair_counting_evaluation", END)

    return workflow.compile()


def run_evaluation(
    reference_labels: List[Any],
    candidate_labels: Dict[str, List[Any]],
    object_ids: Optional[List[Any]] = None,
    noise_label: Any = None,
    noise_special_handling: Optional[bool] = None,
    self_pairing: Optional[bool] = None,
) -> Dict[str, Any]:
    """Run the compiled workflow on freshly initialised state and return the final state"""
    configure_logging()
    app = create_evaluation_workflow()
    state = initialize_evaluation_state(
        reference_labels,
        candidate_labels,
        object_ids=object_ids,
        noise_label=noise_label,
        noise_special_handling=noise_special_handling,
        self_pairing=self_pairing,
    )
    return app.invoke(state)
