from access_gate import create_app
from access_gate.core.logging import configure_logging
from access_gate.core.settings import get_settings

settings = get_settings()
configure_logging(settings.LOG_LEVEL)
app = create_app(settings)


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host=settings.HOST, port=settings.PORT)
