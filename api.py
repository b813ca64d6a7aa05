"""
Auth service entry point

    python api.py            # serve with settings from env.yaml
    uvicorn api:app          # or let uvicorn import the app directly
"""
import uvicorn

from config import ApplicationConfig
from src.api.app import create_app

app = create_app(ApplicationConfig)


if __name__ == "__main__":
    uvicorn.run(
        "api:app",
        host=ApplicationConfig.API_HOST,
        port=ApplicationConfig.API_PORT,
        reload=ApplicationConfig.API_RELOAD,
        log_level=ApplicationConfig.LOG_LEVEL.lower(),
    )
