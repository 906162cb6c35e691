def _dt(value):
    return value.isoformat() if value else None


def user_dict(u, with_roles: bool = False):
    data = {
        "id": u.id,
        "name": u.name,
        "email": u.email,
        "profile_image": u.profile_image,
        "is_restricted": bool(u.is_restricted),
        "role": u.role,
        "created_at": _dt(u.created_at),
    }
    if with_roles:
        data["roles"] = u.roles
    return data


def category_dict(c, with_items: bool = False):
    data = {
        "id": c.id,
        "name": c.name,
        "description": c.description,
        "items_count": len(c.items),
        "created_at": _dt(c.created_at),
        "updated_at": _dt(c.updated_at),
    }
    if with_items:
        data["items"] = [item_dict(i) for i in c.items]
    return data


def item_dict(i, with_category: bool = False, with_transactions: bool = False):
    data = {
        "id": i.id,
        "name": i.name,
        "description": i.description,
        "category_id": i.category_id,
        "quantity": i.quantity,
        "status": i.status,
        "image": i.image,
        "created_at": _dt(i.created_at),
        "updated_at": _dt(i.updated_at),
    }
    if with_category:
        c = i.category
        data["category"] = {"id": c.id, "name": c.name, "description": c.description} if c else None
    if with_transactions:
        data["transactions"] = [transaction_dict(t, nested=False) for t in i.transactions]
    return data


def transaction_dict(t, nested: bool = True):
    data = {
        "id": t.id,
        "user_id": t.user_id,
        "item_id": t.item_id,
        "borrow_date": _dt(t.borrow_date),
        "due_date": _dt(t.due_date),
        "return_date": _dt(t.return_date),
        "status": t.status,
        "created_at": _dt(t.created_at),
        "updated_at": _dt(t.updated_at),
    }
    if nested:
        data["user"] = user_dict(t.user) if t.user else None
        data["item"] = item_dict(t.item) if t.item else None
    return data


def notification_dict(n):
    return {
        "id": n.id,
        "user_id": n.user_id,
        "message": n.message,
        "status": n.status,
        "created_at": _dt(n.created_at),
    }
