"""
Tests for recurring expense alerts and the payables summary.
"""

import pytest
from datetime import date, datetime

from bizfin.models.recurring import (
    RecurrenceType,
    RecurringExpense,
    Scheduled,
    Transaction,
    TransactionType,
    Unscheduled,
)
from bizfin.models.reports import AlertStatus, AlertStatusFilter
from bizfin.reports import (
    ReportPolicy,
    build_recurring_alerts,
    filter_alerts,
    get_user_friendly_summary,
    is_already_paid,
    payment_tag,
    summarize_recurring_payables,
)

TODAY = date(2024, 5, 15)


def rec(
    id: str,
    description: str,
    amount_cents: int,
    start: date,
    recurrence_type: RecurrenceType = RecurrenceType.MONTHLY,
    category: str = None,
    end: date = None,
) -> RecurringExpense:
    return RecurringExpense(
        id=id,
        description=description,
        category=category,
        amount_cents=amount_cents,
        recurrence_type=recurrence_type,
        due_rule=Scheduled(anchor=start),
        end_date=end,
    )


def tx(
    description: str,
    amount_cents: int,
    on: date,
    type: TransactionType = TransactionType.EXPENSE,
    tag: str = None,
) -> Transaction:
    return Transaction(
        type=type,
        amount_cents=amount_cents,
        description=description,
        date=on,
        payment_tag=tag,
    )


@pytest.fixture
def recurring():
    return [
        rec("rent", "Aluguel", 150000, date(2024, 1, 10), category="Ocupação"),
        rec("net", "Internet", 9990, date(2024, 1, 20), category="Serviços"),
        rec("power", "Energia", 30000, date(2024, 2, 5)),
        rec("maid", "Diarista", 12000, date(2024, 5, 1), RecurrenceType.WEEKLY),
        rec("old", "Software antigo", 5000, date(2023, 1, 1), end=date(2024, 4, 30)),
        RecurringExpense(
            id="misc",
            description="Manutenção",
            amount_cents=0,
            recurrence_type=RecurrenceType.MONTHLY,
            due_rule=Unscheduled(),
        ),
    ]


class TestRecurringAlerts:
    """Tests for build_recurring_alerts."""

    def test_rows_sorted_with_status(self, recurring):
        """Test each live expense gets a row with its status, sorted by date."""
        transactions = [
            tx("Aluguel - Loja Centro", 150000, date(2024, 5, 8)),
            tx("Energia", 30000, date(2024, 4, 29)),  # before the paid window
        ]
        alerts = build_recurring_alerts(recurring, transactions, TODAY)

        assert [a.id for a in alerts] == ["power", "rent", "maid", "net"]
        by_id = {a.id: a for a in alerts}

        assert by_id["rent"].next_date == date(2024, 5, 10)
        assert by_id["rent"].days_until == -5
        assert by_id["rent"].status == AlertStatus.PAID
        assert by_id["rent"].paid_transaction_date == date(2024, 5, 8)

        assert by_id["power"].days_until == -10
        assert by_id["power"].status == AlertStatus.OVERDUE

        assert by_id["maid"].next_date == TODAY
        assert by_id["maid"].days_until == 0
        assert by_id["maid"].status == AlertStatus.UNPAID

        assert by_id["net"].days_until == 5
        assert by_id["net"].status == AlertStatus.UNPAID

    def test_ended_and_unscheduled_expenses_left_out(self, recurring):
        """Test series past end_date and unscheduled expenses have no row."""
        ids = {a.id for a in build_recurring_alerts(recurring, [], TODAY)}
        assert "old" not in ids
        assert "misc" not in ids

    @pytest.mark.parametrize("paid_on, expected", [
        (date(2024, 5, 4), False),   # 6 days before
        (date(2024, 5, 5), True),    # 5 days before
        (date(2024, 5, 20), True),   # 10 days after
        (date(2024, 5, 21), False),  # 11 days after
    ])
    def test_paid_window_edges(self, paid_on, expected):
        """Test the paid window is [due - 5 days, due + 10 days]."""
        expenses = [rec("rent", "Aluguel", 150000, date(2024, 1, 10))]
        alerts = build_recurring_alerts(expenses, [tx("Aluguel", 150000, paid_on)], date(2024, 5, 1))
        assert alerts[0].is_paid is expected

    def test_payment_amount_outside_tolerance_not_paid(self):
        """Test a payment far from the expected amount does not count."""
        expenses = [rec("rent", "Aluguel", 150000, date(2024, 1, 10))]
        alerts = build_recurring_alerts(expenses, [tx("Aluguel", 170000, date(2024, 5, 10))], TODAY)
        assert alerts[0].is_paid is False

    def test_income_is_not_a_payment(self):
        """Test income transactions never mark an expense as paid."""
        expenses = [rec("rent", "Aluguel", 150000, date(2024, 1, 10))]
        income = tx("Aluguel", 150000, date(2024, 5, 10), type=TransactionType.INCOME)
        assert build_recurring_alerts(expenses, [income], TODAY)[0].is_paid is False

    def test_datetime_today_accepted(self):
        """Test a datetime 'today' is reduced to its calendar day."""
        expenses = [rec("rent", "Aluguel", 150000, date(2024, 1, 15))]
        alerts = build_recurring_alerts(expenses, [], datetime(2024, 5, 15, 23, 0))
        assert alerts[0].days_until == 0

    def test_filter_alerts(self, recurring):
        """Test the list filters."""
        alerts = build_recurring_alerts(
            recurring, [tx("Aluguel", 150000, date(2024, 5, 10))], TODAY
        )
        assert [a.id for a in filter_alerts(alerts, AlertStatusFilter.PAID)] == ["rent"]
        assert [a.id for a in filter_alerts(alerts, AlertStatusFilter.OVERDUE)] == ["power"]
        assert [a.id for a in filter_alerts(alerts, AlertStatusFilter.UNPAID)] == ["maid", "net"]
        assert len(filter_alerts(alerts)) == 4

    def test_user_friendly_summary(self, recurring):
        """Test the text summary lists overdue and open expenses with totals."""
        alerts = build_recurring_alerts(
            recurring, [tx("Aluguel", 150000, date(2024, 5, 10))], TODAY
        )
        text = get_user_friendly_summary(alerts)
        assert "1 vencida(s), R$ 300,00" in text
        assert "2 a pagar, R$ 219,90" in text
        assert "Energia (05/05)" in text

    def test_user_friendly_summary_empty(self):
        """Test the summary for an empty list."""
        assert get_user_friendly_summary([]) == "Nenhuma despesa recorrente cadastrada."


class TestPayablesSummary:
    """Tests for summarize_recurring_payables."""

    @pytest.fixture
    def expenses(self):
        return [
            rec("rent", "Aluguel", 150000, date(2024, 1, 10), category="Ocupação"),
            rec("power", "Energia", 30000, date(2024, 2, 5)),
            rec("net", "Internet", 9990, date(2024, 1, 20), category="Serviços"),
            rec("acct", "Contador", 50000, date(2024, 1, 25)),
            rec("ins", "Seguro", 80000, date(2023, 5, 28), RecurrenceType.ANNUAL, category="Serviços"),
            rec("maid", "Diarista", 12000, date(2024, 5, 1), RecurrenceType.WEEKLY),
            rec("next", "Frete", 7000, date(2024, 6, 3), RecurrenceType.WEEKLY),
            rec("var", "Comissão", 0, date(2024, 1, 5)),
            RecurringExpense(
                id="misc",
                description="Manutenção",
                amount_cents=10000,
                recurrence_type=RecurrenceType.MONTHLY,
                due_rule=Unscheduled(),
            ),
        ]

    @pytest.fixture
    def month_transactions(self):
        return [
            tx("Aluguel", 150000, date(2024, 5, 9), tag="recurring_expense:rent:2024-05"),
            tx("Contador", 50050, date(2024, 5, 2)),
            tx("Mercado", 40000, date(2024, 5, 3)),
        ]

    def test_totals(self, expenses, month_transactions):
        """Test the bucket totals."""
        summary = summarize_recurring_payables(expenses, month_transactions, TODAY)
        assert summary.total_cents == 131990
        assert summary.from_recurring_cents == 131990
        assert summary.overdue_cents == 30000
        assert summary.due_this_week_cents == 21990
        assert summary.due_this_month_cents == 131990
        assert summary.has_open_items is True

    def test_by_category(self, expenses, month_transactions):
        """Test the category breakdown, largest first, with the fallback label."""
        summary = summarize_recurring_payables(expenses, month_transactions, TODAY)
        rows = [(c.category, c.total_cents, c.overdue_cents) for c in summary.by_category]
        assert rows == [
            ("Serviços", 89990, 0),
            ("Despesas Recorrentes", 42000, 30000),
        ]

    def test_by_day(self, expenses, month_transactions):
        """Test the per-day breakdown covers today through the next 14 days."""
        summary = summarize_recurring_payables(expenses, month_transactions, TODAY)
        rows = [(d.date, d.amount_cents) for d in summary.by_day]
        assert rows == [
            (date(2024, 5, 15), 12000),
            (date(2024, 5, 20), 9990),
            (date(2024, 5, 28), 80000),
        ]

    def test_custom_default_category(self, expenses, month_transactions):
        """Test the fallback category comes from the policy."""
        policy = ReportPolicy(default_category="Fixas")
        summary = summarize_recurring_payables(expenses, month_transactions, TODAY, policy)
        assert "Fixas" in {c.category for c in summary.by_category}

    def test_nothing_open(self):
        """Test an empty input gives an empty summary."""
        summary = summarize_recurring_payables([], [], TODAY)
        assert summary.total_cents == 0
        assert summary.by_category == []
        assert summary.by_day == []
        assert summary.has_open_items is False


class TestAlreadyPaid:
    """Tests for the already-paid detection."""

    def test_payment_tag_keys(self):
        """Test monthly tags use the month, others the due date."""
        monthly = rec("a", "Aluguel", 1000, date(2024, 1, 10))
        weekly = rec("b", "Diarista", 1000, date(2024, 1, 1), RecurrenceType.WEEKLY)
        assert payment_tag(monthly, date(2024, 5, 10)) == "recurring_expense:a:2024-05"
        assert payment_tag(weekly, date(2024, 5, 13)) == "recurring_expense:b:2024-05-13"

    def test_same_description_needs_amount_within_slack(self):
        """Test the heuristic requires a difference strictly under 100 cents."""
        expense = rec("acct", "Contador", 50000, date(2024, 1, 25))
        due = date(2024, 5, 25)
        assert is_already_paid(expense, due, [tx("Contador", 50099, date(2024, 5, 2))])
        assert not is_already_paid(expense, due, [tx("Contador", 50100, date(2024, 5, 2))])

    def test_same_description_needs_same_month(self):
        """Test the heuristic only looks at the occurrence's month."""
        expense = rec("acct", "Contador", 50000, date(2024, 1, 25))
        assert not is_already_paid(expense, date(2024, 5, 25), [tx("Contador", 50000, date(2024, 4, 30))])

    def test_description_must_be_identical(self):
        """Test the heuristic uses exact descriptions, not containment."""
        expense = rec("acct", "Contador", 50000, date(2024, 1, 25))
        assert not is_already_paid(expense, date(2024, 5, 25), [tx("Contador Silva", 50000, date(2024, 5, 2))])

    def test_tagged_income_does_not_count(self):
        """Test only expense transactions count as payments."""
        expense = rec("a", "Aluguel", 1000, date(2024, 1, 10))
        income = tx("x", 1000, date(2024, 5, 1), type=TransactionType.INCOME, tag="recurring_expense:a:2024-05")
        assert not is_already_paid(expense, date(2024, 5, 10), [income])

    def test_surrounding_whitespace_ignored(self):
        """Test descriptions padded with spaces still count as identical."""
        expense = rec("rent", " Aluguel ", 150000, date(2024, 1, 10))
        assert is_already_paid(expense, date(2024, 5, 10), [tx(" Aluguel ", 150000, date(2024, 5, 9))])
