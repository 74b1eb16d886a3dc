"""Run the storage worker: ``python -m storehub_storage``."""

from __future__ import annotations

import asyncio

from storehub_core.observability import setup_logging

from .config import StorageSettings
from .worker import StorageWorker


def main() -> None:
    settings = StorageSettings()
    setup_logging(settings.log_level, settings.log_format)
    asyncio.run(StorageWorker(settings).run())


if __name__ == "__main__":
    main()
