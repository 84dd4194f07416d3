from __future__ import annotations

import logging
import sys

_LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def configure_logging(level: str = "INFO") -> None:
    root = logging.getLogger()
    resolved = logging.getLevelName(str(level).upper())
    if not isinstance(resolved, int):
        resolved = logging.INFO
    root.setLevel(resolved)

    # uvicorn --reload imports the app twice; keep a single handler.
    for handler in root.handlers:
        if getattr(handler, "_wazuh_dashboard", False):
            return

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(logging.Formatter(_LOG_FORMAT))
    handler._wazuh_dashboard = True  # type: ignore[attr-defined]
    root.addHandler(handler)

    # opensearch-py logs every request at INFO.
    logging.getLogger("opensearch").setLevel(max(resolved, logging.WARNING))
    logging.getLogger("httpx").setLevel(max(resolved, logging.WARNING))
