from fastapi import Response
from fastapi.responses import JSONResponse
from fastapi.encoders import jsonable_encoder
from typing import Optional, Any
from pydantic import BaseModel


def build_response(
    status_code: int,
    status: str = None,
    message: str = None,
    data: Any = None,
    code: Optional[str] = None,
    details: Optional[dict] = None,
) -> Response:
    if status_code == 204:
        return Response(status_code=204)

    response = {"statusCode": status_code}

    if status is not None:
        response["status"] = status

    if message is not None:
        response["message"] = message

    if data is not None:
        # If data is a Pydantic model, convert it to a dictionary
        if isinstance(data, BaseModel):
            response["data"] = data.model_dump(mode="json")
        # If data is a list of Pydantic models, convert each to a dictionary
        elif isinstance(data, list) and all(isinstance(item, BaseModel) for item in data):
            response["data"] = [item.model_dump(mode="json") for item in data]
        else:
            response["data"] = jsonable_encoder(data)

    if code is not None:
        response["code"] = code

    if details is not None:
        response["details"] = jsonable_encoder(details)

    return JSONResponse(
        content=response,
        status_code=status_code,
        media_type="application/json"
    )
