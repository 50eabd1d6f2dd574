from .base import build_response

SUCCESS_MESSAGE = "Operation completed successfully"
CREATED_MESSAGE = "Resource created successfully"


def success_response(message: str = SUCCESS_MESSAGE, data=None):
    return build_response(200, "success", message=message, data=data)


def data_response(data=None, message: str = SUCCESS_MESSAGE):
    return build_response(200, status="success", message=message, data=data)


def created_response(data=None, message: str = CREATED_MESSAGE):
    return build_response(201, status="success", message=message, data=data)


def paginated_response(items, page: int, limit: int, total: int, key: str = "items"):
    pages = (total + limit - 1) // limit if limit else 0
    return data_response(
        {
            key: items,
            "pagination": {"page": page, "limit": limit, "total": total, "pages": pages},
        }
    )


def empty_response():
    return build_response(204)
