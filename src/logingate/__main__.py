"""logingate entrypoint.

Run with:
  python -m logingate
"""

import os
import uvicorn

def main() -> None:
    host = os.getenv("LG_HOST", "0.0.0.0")
    port = int(os.getenv("LG_PORT", "8000"))
    reload = os.getenv("LG_RELOAD", "false").lower() in {"1", "true", "yes", "y"}
    uvicorn.run("logingate.app:create_app", factory=True, host=host, port=port, reload=reload)

if __name__ == "__main__":
    main()
