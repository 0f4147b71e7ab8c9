#!/usr/bin/env python3
"""
Run the Tax Genius Pro API.
"""

import os
import sys


def main() -> None:
    # Make src importable
    repo_root = os.path.dirname(__file__)
    sys.path.insert(0, os.path.join(repo_root, "src"))

    from config.settings import get_validated_settings

    # Fail fast on production launch misconfiguration
    settings = get_validated_settings(exit_on_failure=True)

    import uvicorn

    uvicorn.run(
        "web.app:create_app",
        factory=True,
        host=os.getenv("HOST", "127.0.0.1"),
        port=int(os.getenv("PORT", "8000")),
        reload=settings.debug,
    )


if __name__ == "__main__":
    main()
