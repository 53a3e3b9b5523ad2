# hello_handler.py
"""AWS Lambda handler for the health-check function (no configuration needed)."""

from mangum import Mangum

from productos_api.main import create_hello_app

handler = Mangum(create_hello_app(), lifespan="off")
