#!/usr/bin/env python3
"""Run the research group website API server."""
import os
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent))

from dotenv import load_dotenv
load_dotenv()


def main():
    import uvicorn

    from labsite.config import get_settings

    settings = get_settings()
    host = settings.API_HOST
    port = settings.API_PORT
    reload = os.getenv("LABSITE_RELOAD", "false").lower() == "true"

    print(f"""
    Research Group Website API
      URL:        http://{host}:{port}
      API Docs:   http://{host}:{port}/docs
      Database:   {settings.database_path}
      Documents:  {settings.DOCUMENT_BACKEND}
      Hot Reload: {reload}
    """)

    uvicorn.run(
        "server.app:create_app",
        factory=True,
        host=host,
        port=port,
        reload=reload,
        log_level=settings.LOG_LEVEL.lower(),
    )


if __name__ == "__main__":
    main()
