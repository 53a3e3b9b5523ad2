# handler.py
"""AWS Lambda handler using Mangum adapter for FastAPI.

This module provides the entry point for the productos function. Mangum
translates API Gateway events to ASGI format that FastAPI understands.
Building the app validates the environment, so a missing store credential
fails the cold start instead of the first request.
"""

from mangum import Mangum

from productos_api.main import create_app

# lifespan="off" disables ASGI lifespan events which aren't needed in Lambda
handler = Mangum(create_app(), lifespan="off")
