import uvicorn

from foodie.app import create_app
from foodie.config import Config
from foodie.logs import setup_logging


def main() -> None:
    CONFIG = Config()
    setup_logging(CONFIG)
    uvicorn.run(
        create_app(CONFIG),
        host=CONFIG.host,
        port=CONFIG.port,
        log_config=None,
        access_log=CONFIG.debug,
    )


if __name__ == "__main__":
    main()
