"""Fixed/variable expense classification."""

from bizfin.classification.classifier import (
    ExpenseClassifier,
    classify,
    descriptions_match,
    matches_recurring,
)
from bizfin.classification.policy import DEFAULT_MATCH_POLICY, MatchPolicy

__all__ = [
    "DEFAULT_MATCH_POLICY",
    "ExpenseClassifier",
    "MatchPolicy",
    "classify",
    "descriptions_match",
    "matches_recurring",
]
