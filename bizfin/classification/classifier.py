"""
Fixed vs Variable Expense Classification

An expense transaction is "fixed" when it can be attributed to a recurring
expense definition, "variable" otherwise. Used by the DRE and range reports.

Matching against a definition requires ALL of:
1. Description: one contains the other (case-insensitive, trimmed)
2. Amount: within the policy tolerance of the recurring amount
3. Date: inside the definition's [start_date, end_date] range

The first matching definition wins; there is no best-match ranking.

IMPORTANT: Classification never raises on data problems.
A record that lacks what a match needs simply does not match.
"""

from typing import Iterable, Optional, Sequence

from bizfin.classification.policy import DEFAULT_MATCH_POLICY, MatchPolicy
from bizfin.logger import get_logger
from bizfin.models.recurring import ClassificationResult, RecurringExpense, Transaction

logger = get_logger(__name__)


def normalize_description(text: Optional[str]) -> str:
    return (text or "").lower().strip()


def descriptions_match(a: Optional[str], b: Optional[str]) -> bool:
    """Bidirectional containment; empty descriptions never match."""
    left = normalize_description(a)
    right = normalize_description(b)
    if not left or not right:
        return False
    return left in right or right in left


class ExpenseClassifier:
    """
    Splits a period's expenses into fixed and variable totals.

    Stateless apart from its policy, so one instance can be shared freely.
    """

    def __init__(self, policy: MatchPolicy = DEFAULT_MATCH_POLICY):
        self._policy = policy

    @property
    def policy(self) -> MatchPolicy:
        return self._policy

    def _matches_definition(
        self,
        transaction: Transaction,
        expense: RecurringExpense,
    ) -> bool:
        if not descriptions_match(transaction.description, expense.description):
            return False

        if not self._policy.amount_matches(transaction.amount_cents, expense.amount_cents):
            return False

        if expense.start_date is not None and transaction.date < expense.start_date:
            return False
        if expense.end_date is not None and transaction.date > expense.end_date:
            return False

        return True

    def find_match(
        self,
        transaction: Transaction,
        recurring: Iterable[RecurringExpense],
    ) -> Optional[RecurringExpense]:
        """First definition the transaction matches, or None."""
        if not transaction.is_expense:
            return None
        if not normalize_description(transaction.description):
            return None

        for expense in recurring:
            # Definitions without a fixed due date take no part in matching
            if not expense.is_scheduled:
                continue
            if self._matches_definition(transaction, expense):
                return expense
        return None

    def matches_recurring(
        self,
        transaction: Transaction,
        recurring: Iterable[RecurringExpense],
    ) -> bool:
        return self.find_match(transaction, recurring) is not None

    def classify(
        self,
        transactions: Iterable[Transaction],
        recurring: Sequence[RecurringExpense],
    ) -> ClassificationResult:
        """
        Classify expense transactions as fixed or variable.

        Income transactions are ignored. variable is derived as
        total - fixed (floored at zero), never accumulated on its own.
        """
        total_expense = 0
        fixed = 0

        for tx in transactions:
            if not tx.is_expense:
                continue
            total_expense += tx.amount_cents
            if self.matches_recurring(tx, recurring):
                fixed += tx.amount_cents

        variable = max(0, total_expense - fixed)

        logger.debug(
            "expenses_classified",
            total_expense_cents=total_expense,
            fixed_cents=fixed,
            variable_cents=variable,
            recurring_count=len(recurring),
        )

        return ClassificationResult(fixed_cents=fixed, variable_cents=variable)


_default_classifier = ExpenseClassifier()


def matches_recurring(
    transaction: Transaction,
    recurring: Iterable[RecurringExpense],
) -> bool:
    """Module-level shortcut using the default policy."""
    return _default_classifier.matches_recurring(transaction, recurring)


def classify(
    transactions: Iterable[Transaction],
    recurring: Sequence[RecurringExpense],
) -> ClassificationResult:
    """Module-level shortcut using the default policy."""
    return _default_classifier.classify(transactions, recurring)
