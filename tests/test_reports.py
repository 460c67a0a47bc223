from datetime import datetime

import pytest

from ispdesk.models.customer import CustomerStatus
from ispdesk.service import ledger
from ispdesk.service.identity import Actor
from ispdesk.service.reports import ReportService

# Friday; the week starts on Monday 2024-03-11.
NOW = datetime(2024, 3, 15, 12, 0)


@pytest.fixture
def history(make_customer, admin, agent):
    customer = make_customer(plan=5000)
    pay = lambda amount, actor, at: ledger.record_payment(customer.id, amount, actor, at=at)

    pay(100, agent, datetime(2024, 3, 15, 9, 0))     # today
    pay(250, agent, datetime(2024, 3, 15, 11, 0))    # today
    pay(200, admin, datetime(2024, 3, 15, 10, 0))    # today
    pay(300, admin, datetime(2024, 3, 12, 16, 0))    # this week
    pay(400, agent, datetime(2024, 3, 2, 8, 0))      # this month
    pay(500, admin, datetime(2024, 1, 20, 8, 0))     # this year
    pay(600, admin, datetime(2023, 12, 31, 23, 0))   # last year
    pay(700, admin, datetime(2024, 3, 16, 9, 0))     # after the pinned instant
    return customer


class TestPeriodStart:

    def test_boundaries(self):
        assert ReportService.period_start("today", NOW) == datetime(2024, 3, 15)
        assert ReportService.period_start("week", NOW) == datetime(2024, 3, 11)
        assert ReportService.period_start("month", NOW) == datetime(2024, 3, 1)
        assert ReportService.period_start("year", NOW) == datetime(2024, 1, 1)
        assert ReportService.period_start("all", NOW) is None

    def test_unknown_range(self):
        with pytest.raises(ValueError):
            ReportService.period_start("decade", NOW)


class TestCollections:

    def test_period_totals(self, history):
        assert ReportService.collection_total("today", NOW) == 550
        assert ReportService.collection_total("week", NOW) == 850
        assert ReportService.collection_total("month", NOW) == 1250
        assert ReportService.collection_total("year", NOW) == 1750
        assert ReportService.collection_total("all", NOW) == 2350

    def test_totals_by_role(self, history):
        assert ReportService.collection_total("today", NOW, "Agent") == 350
        assert ReportService.collection_total("today", NOW, "Admin") == 200

    def test_collector_breakdown_sorted_by_amount(self, history):
        breakdown = ReportService.collector_breakdown(NOW)
        assert breakdown == [
            {"collector": "Subhajit", "role": "Agent", "amount": 350.0},
            {"collector": "Vinod", "role": "Admin", "amount": 200.0},
        ]

    def test_collector_breakdown_merges_roles_under_one_name(self, make_customer, admin):
        customer = make_customer(plan=1000)
        same_name = Actor(id="agent", name=admin.name, role="Agent")
        ledger.record_payment(customer.id, 100, admin, at=datetime(2024, 3, 15, 9, 0))
        ledger.record_payment(customer.id, 50, same_name, at=datetime(2024, 3, 15, 10, 0))

        assert ReportService.collector_breakdown(NOW) == [
            {"collector": "Vinod", "role": "Admin", "amount": 150.0},
        ]

    def test_list_transactions_newest_first(self, history):
        rows = ReportService.list_transactions("month", NOW)
        # insertion order, not the back-dated timestamps
        assert [t.amount_paid for t in rows] == [400, 300, 200, 250, 100]

    def test_collections_summary(self, history):
        summary = ReportService.report_summary("collections", "today", NOW)
        assert summary == {"report_type": "collections", "total": 550.0, "count": 3, "average": 183}

    @pytest.mark.usefixtures("app")
    def test_empty_summary(self):
        summary = ReportService.report_summary("collections", "today", NOW)
        assert summary["count"] == 0
        assert summary["average"] == 0


class TestDues:

    def test_pending_receivables(self, make_customer):
        make_customer(name="A", plan=500)
        make_customer(name="B", plan=0)
        make_customer(name="C", plan=1200)

        assert ReportService.pending_dues() == (1700.0, 2)
        assert [c.name for c in ReportService.pending_customers()] == ["C", "A"]

    def test_overpaid_customers_are_not_receivables(self, make_customer, admin):
        a = make_customer(name="A", plan=300)
        make_customer(name="B", plan=400)
        ledger.record_payment(a.id, 500, admin)

        assert ReportService.pending_dues() == (400.0, 1)

    def test_dues_summary(self, make_customer):
        make_customer(name="A", plan=500)
        make_customer(name="C", plan=1200)

        summary = ReportService.report_summary("dues")
        assert summary == {"report_type": "dues", "total": 1700.0, "count": 2, "average": 850}


def test_dashboard_stats(history, make_customer):
    idle = make_customer(name="Idle", plan=0)
    ledger.update_customer_status(idle.id, CustomerStatus.INACTIVE)

    stats = ReportService.dashboard_stats(NOW)

    assert stats["total_collection_today"] == 550
    assert stats["weekly_collection"] == 850
    assert stats["monthly_collection"] == 1250
    assert stats["yearly_collection"] == 1750
    assert stats["staff_collection_today"] == 350
    assert stats["admin_collection_today"] == 200
    # 5000 minus every recorded payment, including the one after NOW
    assert stats["total_pending_dues"] == 5000 - 3050
    assert stats["pending_customers"] == 1
    assert stats["active_customers"] == 1
    assert stats["collector_breakdown"][0]["collector"] == "Subhajit"
