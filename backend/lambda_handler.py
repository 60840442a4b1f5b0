from mangum import Mangum
from main import app

# AWS Lambda entrypoint for API Gateway HTTP APIs.
handler = Mangum(app)
