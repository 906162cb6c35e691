from datetime import datetime, timedelta

from inventory_app.extensions import db
from inventory_app.models.item import Item
from inventory_app.models.notification import Notification
from inventory_app.models.transaction import Transaction
from inventory_app.models.user import User

from conftest import headers_for, loan_dates


def _borrow(client, headers, item_id, days=7):
    borrow_date, due_date = loan_dates(days)
    return client.post("/user/transactions/borrow", headers=headers,
                       json={"item_id": item_id, "borrow_date": borrow_date, "due_date": due_date})


def test_borrow_last_unit_moves_item_to_maintenance(client, user, user_headers, item):
    r = _borrow(client, user_headers, item.id)
    assert r.status_code == 201
    data = r.get_json()["data"]
    assert data["status"] == "borrowed"
    assert data["return_date"] is None
    assert data["user"]["id"] == user.id
    assert data["item"]["id"] == item.id

    db.session.refresh(item)
    assert item.quantity == 0
    assert item.status == Item.STATUS_MAINTENANCE

    notes = Notification.query.filter_by(user_id=user.id).all()
    assert len(notes) == 1
    assert notes[0].message.startswith(f"You have borrowed {item.name}. Please return it by")


def test_second_borrow_of_last_unit_fails(client, user_headers, make_user, item):
    assert _borrow(client, user_headers, item.id).status_code == 201

    other = make_user(email="second@example.com")
    r = _borrow(client, headers_for(other), item.id)
    assert r.status_code == 400
    assert r.get_json()["message"] == "Item is not available for borrowing"
    assert Transaction.query.count() == 1


def test_borrow_out_of_stock(client, user_headers, make_item):
    item = make_item(quantity=0, status=Item.STATUS_AVAILABLE)
    r = _borrow(client, user_headers, item.id)
    assert r.status_code == 400
    assert r.get_json()["message"] == "Item is out of stock"
    assert Transaction.query.count() == 0
    db.session.refresh(item)
    assert item.quantity == 0


def test_borrow_missing_item(client, user_headers):
    r = _borrow(client, user_headers, 12345)
    assert r.status_code == 404
    assert r.get_json()["message"] == "Item not found"


def test_restricted_user_cannot_borrow(client, make_user, item):
    restricted = make_user(email="late@example.com", is_restricted=True)
    r = _borrow(client, headers_for(restricted), item.id)
    assert r.status_code == 403
    assert "restricted" in r.get_json()["message"]
    db.session.refresh(item)
    assert item.quantity == 1


def test_borrow_date_rules(client, user_headers, item):
    today = datetime.utcnow().date()
    r = client.post("/user/transactions/borrow", headers=user_headers, json={
        "item_id": item.id,
        "borrow_date": (today - timedelta(days=1)).isoformat(),
        "due_date": today.isoformat(),
    })
    assert r.status_code == 422
    assert "borrow_date" in r.get_json()["errors"]

    r = client.post("/user/transactions/borrow", headers=user_headers, json={
        "item_id": item.id, "borrow_date": today.isoformat(), "due_date": today.isoformat(),
    })
    assert r.status_code == 422
    assert "due_date" in r.get_json()["errors"]

    r = client.post("/user/transactions/borrow", headers=user_headers, json={"borrow_date": "tomorrow"})
    assert r.status_code == 422
    assert set(r.get_json()["errors"]) == {"item_id", "borrow_date", "due_date"}
    assert r.get_json()["errors"]["item_id"] == "The item selection is required."
    assert r.get_json()["errors"]["borrow_date"] == "The borrow date must be a valid date."


def test_borrow_rejects_non_integer_item_id(client, user_headers):
    borrow_date, due_date = loan_dates()
    r = client.post("/user/transactions/borrow", headers=user_headers,
                    json={"item_id": "abc", "borrow_date": borrow_date, "due_date": due_date})
    assert r.status_code == 422
    message = r.get_json()["errors"]["item_id"]
    assert message != "The item selection is required."
    assert "integer" in message
    assert Transaction.query.count() == 0


def test_return_restores_quantity_and_status(client, user, user_headers, item):
    transaction_id = _borrow(client, user_headers, item.id).get_json()["data"]["id"]

    r = client.put(f"/user/transactions/{transaction_id}/return", headers=user_headers)
    assert r.status_code == 200
    data = r.get_json()["data"]
    assert data["status"] == "returned"
    assert data["return_date"] is not None

    db.session.refresh(item)
    assert item.quantity == 1
    assert item.status == Item.STATUS_AVAILABLE
    assert Notification.query.filter_by(
        user_id=user.id, message=f"You have returned {item.name}. Thank you!"
    ).count() == 1


def test_return_keeps_unavailable_status(client, user, user_headers, make_item):
    item = make_item(quantity=2)
    transaction_id = _borrow(client, user_headers, item.id).get_json()["data"]["id"]
    item.status = Item.STATUS_UNAVAILABLE
    db.session.commit()

    client.put(f"/user/transactions/{transaction_id}/return", headers=user_headers)
    db.session.refresh(item)
    assert item.quantity == 2
    assert item.status == Item.STATUS_UNAVAILABLE


def test_return_is_one_way(client, user_headers, admin_headers, item):
    transaction_id = _borrow(client, user_headers, item.id).get_json()["data"]["id"]
    assert client.put(f"/user/transactions/{transaction_id}/return", headers=user_headers).status_code == 200

    r = client.put(f"/user/transactions/{transaction_id}/return", headers=user_headers)
    assert r.status_code == 400
    assert r.get_json()["message"] == "Item is already returned or transaction is cancelled"

    r = client.put(f"/admin/transactions/{transaction_id}/cancel", headers=admin_headers)
    assert r.status_code == 400
    assert r.get_json()["message"] == "Transaction is already returned or cancelled"

    db.session.refresh(item)
    assert item.quantity == 1


def test_return_by_other_user_is_forbidden(client, user_headers, make_user, item):
    transaction_id = _borrow(client, user_headers, item.id).get_json()["data"]["id"]
    stranger = make_user(email="stranger@example.com")

    r = client.put(f"/user/transactions/{transaction_id}/return", headers=headers_for(stranger))
    assert r.status_code == 403
    assert db.session.get(Transaction, transaction_id).status == Transaction.STATUS_BORROWED


def test_admin_can_return_for_user(client, user_headers, admin_headers, item):
    transaction_id = _borrow(client, user_headers, item.id).get_json()["data"]["id"]
    r = client.put(f"/user/transactions/{transaction_id}/return", headers=admin_headers)
    assert r.status_code == 200


def test_return_missing_transaction(client, user_headers):
    r = client.put("/user/transactions/999/return", headers=user_headers)
    assert r.status_code == 404
    assert r.get_json()["message"] == "Transaction not found"


def test_return_lifts_restriction_when_nothing_overdue(client, make_user, item):
    late = make_user(email="late@example.com", is_restricted=True)
    item.quantity = 0
    item.status = Item.STATUS_MAINTENANCE
    overdue = Transaction(
        user_id=late.id, item_id=item.id,
        borrow_date=datetime(2023, 12, 20), due_date=datetime(2024, 1, 1),
        status=Transaction.STATUS_BORROWED,
    )
    db.session.add(overdue)
    db.session.commit()

    r = client.put(f"/user/transactions/{overdue.id}/return", headers=headers_for(late))
    assert r.status_code == 200

    assert db.session.get(User, late.id).is_restricted is False
    messages = [n.message for n in Notification.query.filter_by(user_id=late.id)]
    assert any("restriction has been lifted" in m for m in messages)
    assert any(m.startswith("You have returned") for m in messages)


def test_return_keeps_restriction_while_other_loans_overdue(client, make_user, make_item):
    late = make_user(email="late@example.com", is_restricted=True)
    first, second = make_item(name="One", quantity=5), make_item(name="Two", quantity=5)
    for it in (first, second):
        db.session.add(Transaction(
            user_id=late.id, item_id=it.id,
            borrow_date=datetime(2023, 12, 20), due_date=datetime(2024, 1, 1),
            status=Transaction.STATUS_BORROWED,
        ))
    db.session.commit()
    loan = Transaction.query.filter_by(item_id=first.id).first()

    assert client.put(f"/user/transactions/{loan.id}/return", headers=headers_for(late)).status_code == 200
    assert db.session.get(User, late.id).is_restricted is True
    assert Notification.query.filter(Notification.message.contains("lifted")).count() == 0


def test_admin_cancel_restocks_without_touching_restriction(client, admin_headers, make_user, item):
    borrower = make_user(email="borrower@example.com")
    transaction_id = _borrow(client, headers_for(borrower), item.id).get_json()["data"]["id"]
    borrower.is_restricted = True
    db.session.commit()

    r = client.put(f"/admin/transactions/{transaction_id}/cancel", headers=admin_headers)
    assert r.status_code == 200
    assert r.get_json()["data"]["status"] == "cancelled"

    db.session.refresh(item)
    assert item.quantity == 1
    assert item.status == Item.STATUS_AVAILABLE
    assert db.session.get(User, borrower.id).is_restricted is True
    assert Notification.query.filter_by(
        user_id=borrower.id,
        message=f"Your transaction for {item.name} has been cancelled by an administrator."
    ).count() == 1


def test_cancel_requires_admin(client, user_headers, item):
    transaction_id = _borrow(client, user_headers, item.id).get_json()["data"]["id"]
    assert client.put(f"/admin/transactions/{transaction_id}/cancel", headers=user_headers).status_code == 403


def test_cancel_missing_transaction(client, admin_headers):
    assert client.put("/admin/transactions/999/cancel", headers=admin_headers).status_code == 404


def test_listing_is_scoped_to_principal(client, user, user_headers, admin_headers, make_user, make_item):
    other = make_user(email="other@example.com")
    _borrow(client, user_headers, make_item(name="Mine", quantity=3).id)
    _borrow(client, headers_for(other), make_item(name="Theirs", quantity=3).id)

    mine = client.get(f"/user/transactions?user_id={other.id}", headers=user_headers).get_json()["data"]
    assert [t["user_id"] for t in mine] == [user.id]

    everything = client.get("/admin/transactions", headers=admin_headers).get_json()["data"]
    assert len(everything) == 2

    filtered = client.get(f"/admin/transactions?user_id={other.id}&status=borrowed",
                          headers=admin_headers).get_json()["data"]
    assert [t["user_id"] for t in filtered] == [other.id]

    assert client.get("/admin/transactions?status=returned", headers=admin_headers).get_json()["data"] == []


def test_unexpected_failure_is_reported_as_500(client, user_headers, item, monkeypatch):
    from inventory_app.services import transaction_service

    def boom(*args, **kwargs):
        raise RuntimeError("database went away")

    monkeypatch.setattr(transaction_service.NotificationService, "notify", boom)
    r = _borrow(client, user_headers, item.id)
    assert r.status_code == 500
    assert r.get_json()["message"] == "Failed to borrow item: database went away"
    assert Transaction.query.count() == 0
    db.session.refresh(item)
    assert item.quantity == 1


def test_early_return_of_future_loan_keeps_dates_ordered(client, user_headers, item):
    start = datetime.utcnow().date() + timedelta(days=3)
    r = client.post("/user/transactions/borrow", headers=user_headers, json={
        "item_id": item.id,
        "borrow_date": start.isoformat(),
        "due_date": (start + timedelta(days=5)).isoformat(),
    })
    transaction_id = r.get_json()["data"]["id"]

    assert client.put(f"/user/transactions/{transaction_id}/return", headers=user_headers).status_code == 200
    t = db.session.get(Transaction, transaction_id)
    assert t.return_date >= t.borrow_date
