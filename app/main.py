from __future__ import annotations

import logging
import os

logger = logging.getLogger(__name__)

if os.getenv("DEBUG_ATTACH") == "1":
    import debugpy

    if os.environ.get("DEBUGPY_LISTENING") != "1":
        debugpy.listen(("0.0.0.0", int(os.getenv("DEBUGPY_PORT", "5678"))))
        os.environ["DEBUGPY_LISTENING"] = "1"
        logger.warning("Waiting for debugger attach...")

    if not debugpy.is_client_connected():
        debugpy.wait_for_client()

from app.UI import run_app


def main() -> None:
    """Launch the Streamlit survey UI (``streamlit run app/main.py``)."""

    run_app()


if __name__ == "__main__":
    main()
