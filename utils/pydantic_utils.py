"""
Pydantic to dict / JSON conversion utilities
"""
import json
from typing import Any, Dict, List, Union

from pydantic import BaseModel

from config.schemas import EvaluationResult


def pydantic_to_dict(obj: Any) -> Union[Dict, List, Any]:
    """
    Convert Pydantic model to dictionary

    Args:
        obj: Pydantic model instance, RootModel, or any other object

    Returns:
        Dictionary representation or the input object unchanged if not a Pydantic model
    """
    if isinstance(obj, EvaluationResult):
        return result_to_dict(obj)

    if isinstance(obj, BaseModel):
        return obj.model_dump()

    if isinstance(obj, (list, tuple)):
        return [pydantic_to_dict(item) for item in obj]

    return obj


def pydantic_to_json(obj: Any) -> str:
    """
    Convert Pydantic model to JSON string. NaN scores are written as null.

    Args:
        obj: Pydantic model instance or any other object

    Returns:
        JSON string representation
    """
    if isinstance(obj, BaseModel) and not isinstance(obj, EvaluationResult):
        return obj.model_dump_json()

    data = _nan_to_none(pydantic_to_dict(obj))
    return json.dumps(data, ensure_ascii=False, indent=2)


def result_to_dict(result: EvaluationResult) -> Dict[str, Any]:
    """
    Convert an evaluation result bundle to plain Python types

    The ContingencyTable is replaced by its joint counts and margins as nested lists.

    Args:
        result: Result bundle of one comparison

    Returns:
        Dictionary with scores, pair counts and the raw table
    """
    data = result.model_dump(exclude={'table'})
    table = result.table
    if table is not None:
        data['contingency'] = {
            'counts': table.counts.tolist(),
            'row_sums': table.row_sums.tolist(),
            'col_sums': table.col_sums.tolist(),
            'total': table.total,
            'noise_row': table.noise_row,
            'noise_col': table.noise_col,
        }
    else:
        data['contingency'] = None
    return data


def _nan_to_none(value: Any) -> Any:
    if isinstance(value, float) and value != value:
        return None
    if isinstance(value, dict):
        return {k: _nan_to_none(v) for k, v in value.items()}
    if isinstance(value, list):
        return [_nan_to_none(v) for v in value]
    return value
