import logging

from dotenv import load_dotenv

load_dotenv()

from tubecompare.api import create_app
from tubecompare.config import Settings


def configure_logging(level: str = "INFO"):
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


settings = Settings.from_env(env_file=None)
configure_logging(settings.log_level)

app = create_app(settings)

if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host=settings.host, port=settings.port)
