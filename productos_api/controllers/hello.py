# controllers/hello.py
from fastapi import APIRouter, Request

router = APIRouter()

# Every method defined by RFC 9110 plus PATCH.
ALL_METHODS = ["GET", "HEAD", "POST", "PUT", "DELETE", "CONNECT", "OPTIONS", "TRACE", "PATCH"]


@router.api_route("/hello", methods=ALL_METHODS, summary="Health check")
def hello(request: Request):
    return {"message": "Hello from Productos API!", "method": request.method}
