import uvicorn

from ledger_brain.core import settings
from ledger_brain.logger import get_logging_config


def main() -> None:
    uvicorn.run(
        "ledger_brain.app:app",
        host=settings.API_HOST,
        port=settings.API_PORT,
        log_config=get_logging_config(),
    )


if __name__ == "__main__":
    main()
