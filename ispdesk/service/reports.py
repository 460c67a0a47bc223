from datetime import datetime, timedelta
from sqlalchemy import func
from ispdesk.extension import db
from ispdesk.models import Customer, Transaction
from ispdesk.models.customer import CustomerStatus
from ispdesk.utils.roles import ROLE_ADMIN, ROLE_AGENT

TIME_RANGES = ("today", "week", "month", "year", "all")


class ReportService:
    """Aggregates over the full customer and transaction tables. Nothing is stored."""

    @staticmethod
    def period_start(time_range, now=None):
        now = now or datetime.utcnow()
        midnight = now.replace(hour=0, minute=0, second=0, microsecond=0)
        if time_range == "today":
            return midnight
        if time_range == "week":
            return midnight - timedelta(days=now.weekday())
        if time_range == "month":
            return midnight.replace(day=1)
        if time_range == "year":
            return midnight.replace(month=1, day=1)
        if time_range == "all":
            return None
        raise ValueError(f"Unknown time range: {time_range}")

    @staticmethod
    def _window(time_range, now):
        now = now or datetime.utcnow()
        filters = [Transaction.date <= now]
        start = ReportService.period_start(time_range, now)
        if start is not None:
            filters.append(Transaction.date >= start)
        return filters

    @staticmethod
    def collection_total(time_range, now=None, collector_role=None):
        filters = ReportService._window(time_range, now)
        if collector_role:
            filters.append(Transaction.collector_role == collector_role)
        total = db.session.query(
            func.coalesce(func.sum(Transaction.amount_paid), 0)
        ).filter(*filters).scalar()
        return float(total)

    @staticmethod
    def list_transactions(time_range="all", now=None, collector_role=None):
        filters = ReportService._window(time_range, now)
        if collector_role:
            filters.append(Transaction.collector_role == collector_role)
        return Transaction.query.filter(*filters).order_by(Transaction.seq.desc()).all()

    @staticmethod
    def pending_customers():
        return (
            Customer.query.filter(Customer.total_due > 0)
            .order_by(Customer.total_due.desc())
            .all()
        )

    @staticmethod
    def pending_dues():
        """(sum of positive dues, number of customers owing)"""
        total, count = db.session.query(
            func.coalesce(func.sum(Customer.total_due), 0),
            func.count(Customer.id),
        ).filter(Customer.total_due > 0).one()
        return float(total), int(count)

    @staticmethod
    def collector_breakdown(now=None):
        """Today's collections per collector name, largest first."""
        rows = (
            db.session.query(
                Transaction.collector_name,
                func.min(Transaction.collector_role).label("role"),
                func.sum(Transaction.amount_paid).label("amount"),
            )
            .filter(*ReportService._window("today", now))
            .group_by(Transaction.collector_name)
            .order_by(func.sum(Transaction.amount_paid).desc())
            .all()
        )
        return [
            {"collector": name, "role": role, "amount": float(amount or 0)}
            for name, role, amount in rows
        ]

    @staticmethod
    def dashboard_stats(now=None):
        now = now or datetime.utcnow()
        pending_total, pending_count = ReportService.pending_dues()
        active = Customer.query.filter_by(status=CustomerStatus.ACTIVE).count()

        return {
            "total_collection_today": ReportService.collection_total("today", now),
            "weekly_collection": ReportService.collection_total("week", now),
            "monthly_collection": ReportService.collection_total("month", now),
            "yearly_collection": ReportService.collection_total("year", now),
            "staff_collection_today": ReportService.collection_total("today", now, ROLE_AGENT),
            "admin_collection_today": ReportService.collection_total("today", now, ROLE_ADMIN),
            "total_pending_dues": pending_total,
            "pending_customers": pending_count,
            "active_customers": active,
            "collector_breakdown": ReportService.collector_breakdown(now),
        }

    @staticmethod
    def report_summary(report_type, time_range="today", now=None, collector_role=None):
        if report_type == "collections":
            transactions = ReportService.list_transactions(time_range, now, collector_role)
            total = sum(t.amount_paid for t in transactions)
            count = len(transactions)
            return {
                "report_type": report_type,
                "total": float(total),
                "count": count,
                "average": round(total / count) if count else 0,
            }

        if report_type == "dues":
            total, count = ReportService.pending_dues()
            return {
                "report_type": report_type,
                "total": total,
                "count": count,
                "average": round(total / count) if count else 0,
            }

        raise ValueError(f"Unknown report type: {report_type}")
