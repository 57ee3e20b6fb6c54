"""User management: a paginated, editable table with a row action."""

USERS = [
    {"id": i, "name": f"User {i}", "email": f"user{i}@example.com", "active": i % 3 != 0}
    for i in range(1, 43)
]


def load_users(params):
    params = params or {}
    page = int(params.get("page", 1))
    size = int(params.get("pageSize", 10))
    rows = list(USERS)
    sort_by = params.get("sortBy")
    if sort_by:
        rows.sort(key=lambda r: r.get(sort_by), reverse=params.get("sortDirection") == "desc")
    start = (page - 1) * size
    return {"items": rows[start : start + size], "totalItems": len(rows)}


def update_user(params):
    item_id = params["itemId"]
    for row in USERS:
        if row["id"] == item_id:
            row.update(params.get("changes") or {})
            return row
    raise LookupError(f"No user with id {item_id}")


def deactivate_user(params):
    return update_user({"itemId": params["itemId"], "changes": {"active": False}})


users_tool = {
    "id": "user-management",
    "title": "User Management",
    "content": {
        "type": "editableTable",
        "dataLoader": {"functionName": "loadUsers"},
        "tableConfig": {
            "rowIdentifier": "id",
            "itemUpdater": {"functionName": "updateUser"},
            "columns": [
                {"field": "name", "label": "Name", "isEditable": True},
                {"field": "email", "label": "Email", "isEditable": True},
                {"field": "active", "label": "Active", "isEditable": True, "editorType": "checkbox"},
            ],
            "rowActions": [
                {"id": "deactivate", "label": "Deactivate", "functionName": "deactivateUser"},
            ],
            "pagination": {"defaultPageSize": 10},
        },
    },
    "functions": {
        "loadUsers": load_users,
        "updateUser": update_user,
        "deactivateUser": deactivate_user,
    },
}
