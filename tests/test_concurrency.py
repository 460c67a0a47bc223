import threading

from ispdesk.extension import db
from ispdesk.models import Transaction
from ispdesk.service import ledger
from ispdesk.service.ledger import IdempotencyConflict
from ispdesk.service.locks import CustomerLocks, customer_locks


def _pay_in_threads(app, jobs):
    """Run record_payment for each (customer_id, amount, actor) on its own thread."""
    start = threading.Barrier(len(jobs))
    errors = []

    def worker(customer_id, amount, actor):
        try:
            with app.app_context():
                start.wait()
                ledger.record_payment(customer_id, amount, actor)
                db.session.remove()
        except Exception as exc:  # surfaced through the assertion below
            errors.append(exc)

    threads = [threading.Thread(target=worker, args=job) for job in jobs]
    for t in threads:
        t.start()
    for t in threads:
        t.join(timeout=30)
    assert not errors, errors


def test_concurrent_payments_on_one_customer_serialize(app, make_customer, agent):
    customer = make_customer(plan=500)

    _pay_in_threads(app, [(customer.id, 10, agent) for _ in range(20)])

    db.session.expire_all()
    assert ledger.get_customer(customer.id).total_due == 300

    trail = sorted(t.remaining_due_after for t in ledger.get_ledger(customer.id))
    assert trail == [300 + 10 * i for i in range(20)]


def test_concurrent_payments_across_customers(app, make_customer, admin, agent):
    one = make_customer(name="One", plan=1000)
    two = make_customer(name="Two", plan=1000)

    jobs = [(one.id, 50, admin) for _ in range(6)] + [(two.id, 25, agent) for _ in range(6)]
    _pay_in_threads(app, jobs)

    db.session.expire_all()
    assert ledger.get_customer(one.id).total_due == 700
    assert ledger.get_customer(two.id).total_due == 850
    assert Transaction.query.count() == 12
    assert len(customer_locks) == 0


def test_lock_registry_releases_entries():
    locks = CustomerLocks()

    with locks.hold("a"):
        with locks.hold("b"):
            assert len(locks) == 2
    assert len(locks) == 0


def test_lock_released_when_body_raises():
    locks = CustomerLocks()

    try:
        with locks.hold("a"):
            raise RuntimeError("boom")
    except RuntimeError:
        pass

    acquired = threading.Event()

    def grab():
        with locks.hold("a"):
            acquired.set()

    t = threading.Thread(target=grab)
    t.start()
    t.join(timeout=5)
    assert acquired.is_set()


def _apply_in_threads(app, jobs):
    """Run apply_payment for each (customer_id, actor, key) behind a barrier; collect outcomes."""
    start = threading.Barrier(len(jobs))
    outcomes = []

    def worker(customer_id, actor, key):
        with app.app_context():
            start.wait()
            try:
                _, replayed = ledger.apply_payment(customer_id, 100, actor, idempotency_key=key)
                outcomes.append("replayed" if replayed else "ok")
            except IdempotencyConflict:
                outcomes.append("conflict")
            except Exception as exc:  # surfaced through the assertion below
                outcomes.append(repr(exc))
            finally:
                db.session.remove()

    threads = [threading.Thread(target=worker, args=job) for job in jobs]
    for t in threads:
        t.start()
    for t in threads:
        t.join(timeout=30)
    return sorted(outcomes)


def test_shared_key_across_customers_is_a_conflict(app, make_customer, admin):
    one = make_customer(name="One", plan=500)
    two = make_customer(name="Two", plan=500)

    outcomes = _apply_in_threads(app, [
        (one.id, admin, "k1"),
        (two.id, admin, "k1"),
    ])

    assert outcomes == ["conflict", "ok"]
    db.session.expire_all()
    assert Transaction.query.count() == 1
    dues = sorted(ledger.get_customer(c.id).total_due for c in (one, two))
    assert dues == [400, 500]


def test_simultaneous_retries_apply_once(app, make_customer, agent):
    customer = make_customer(plan=500)

    outcomes = _apply_in_threads(app, [
        (customer.id, agent, "tap-7"),
        (customer.id, agent, "tap-7"),
    ])

    assert outcomes == ["ok", "replayed"]
    db.session.expire_all()
    assert ledger.get_customer(customer.id).total_due == 400
