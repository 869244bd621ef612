"""
Tabular views of pair-counting results for downstream renderers.
"""
from typing import List, Sequence

import numpy as np
import pandas as pd

from config.schemas import SCORE_FIELDS, EvaluationResult


COUNT_COLUMNS = ["a", "b", "c", "d", "total"]


class ScoreTableHelper:
    """Helper class turning result bundles into pandas tables."""

    @staticmethod
    def score_columns() -> List[str]:
        """Display names of the eight indices in canonical order."""
        return [display for _, display in SCORE_FIELDS]

    @staticmethod
    def results_to_frame(results: Sequence[EvaluationResult]) -> pd.DataFrame:
        """One row per candidate: scores in canonical order, pair counts, status.

        Failed comparisons keep their row with NaN scores and the error message.
        """
        columns = ["candidate_index", "candidate_name", "status"]
        columns += ScoreTableHelper.score_columns() + COUNT_COLUMNS + ["error"]

        rows = []
        for result in results:
            row = {
                "candidate_index": result.candidate_index,
                "candidate_name": result.candidate_name,
                "status": result.status,
                "error": result.error,
            }
            if result.scores is not None:
                row.update(result.scores.as_ordered_dict())
                counts = result.scores.pair_counts
                row.update({col: getattr(counts, col) for col in COUNT_COLUMNS})
            else:
                row.update({col: np.nan for col in ScoreTableHelper.score_columns()})
            rows.append(row)

        return pd.DataFrame(rows, columns=columns)

    @staticmethod
    def contingency_to_frame(result: EvaluationResult, margins: bool = True) -> pd.DataFrame:
        """Joint counts of one comparison, optionally with row / column totals."""
        if result.table is None:
            raise ValueError(f"Candidate {result.candidate_index} has no contingency table ({result.error})")

        frame = result.table.to_frame()
        if margins:
            frame["total"] = frame.sum(axis=1)
            frame.loc["total"] = frame.sum(axis=0)
        return frame
