# nodes/evaluation_node.py - Pair-counting evaluation node
from typing import Dict, Any
import logging

from config.config import settings
from config.schemas import PairCountingConfig
from nodes.paircounting import ByLabelReference, Partition, PairCountingEvaluator
from utils.pydantic_utils import pydantic_to_dict

logger = logging.getLogger(__name__)


def _resolve_config(state: Dict[str, Any]) -> PairCountingConfig:
    """Merge state flags with settings defaults"""
    defaults = PairCountingConfig.from_settings(settings)
    overrides = {
        key: state[key]
        for key in ("noise_special_handling", "self_pairing")
        if state.get(key) is not None
    }
    return defaults.model_copy(update=overrides)


def pair_counting_evaluation_node(state: Dict[str, Any]) -> Dict[str, Any]:
    """
    Score every candidate labelling in the state against the reference labelling

    Args:
        state: Graph state with reference_labels and candidate_labels

    Returns:
        Updated state with pair_counting_results and current_stage
    """
    reference_labels = state.get('reference_labels')
    candidate_labels = state.get('candidate_labels') or {}

    if reference_labels is None:
        logger.error("No reference_labels in state")
        return {**state, 'error': "reference_labels missing", 'current_stage': 'EVALUATION_FAILED'}

    object_ids = state.get('object_ids')
    noise_label = state.get('noise_label')

    try:
        config = _resolve_config(state)
        reference = ByLabelReference(reference_labels, ids=object_ids, noise_label=noise_label)
        candidates = [
            Partition.from_labels(labels, ids=object_ids, noise_label=noise_label)
            for labels in candidate_labels.values()
        ]
        evaluator = PairCountingEvaluator(reference, config=config)
        results = evaluator.evaluate(candidates, names=list(candidate_labels.keys()))
    except Exception as e:
        logger.error(f"Pair-counting evaluation failed: {str(e)}")
        return {**state, 'error': str(e), 'current_stage': 'EVALUATION_FAILED'}

    failed = sum(1 for r in results if not r.ok)
    logger.info(f"Pair-counting evaluation completed: {len(results)} candidates, {failed} failed")

    return {
        **state,
        'pair_counting_results': [pydantic_to_dict(r) for r in results],
        'current_stage': 'EVALUATION_COMPLETED',
        'error': None,
    }
