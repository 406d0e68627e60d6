import logging

import uvicorn
from weekfit.api.api_run import app
from weekfit.utilities.config import APP_HOST, APP_PORT, LOG_LEVEL
from weekfit.utilities.network import get_local_ip


if __name__ == "__main__":
    logging.basicConfig(level=LOG_LEVEL, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    host = APP_HOST
    port = APP_PORT
    local_url = f"http://localhost:{port}"
    local_ip = get_local_ip()
    lan_url = f"http://{local_ip}:{port}"
    # Print a friendly message that points to the URL you can open in a browser
    print(f"Uvicorn running on {local_url} (Press CTRL+C to quit)")
    # Also show the LAN-accessible URL for other devices on the same network
    if local_ip not in ("127.0.0.1", "localhost"):
        print(f"Accessible from other devices at: {lan_url}")
    uvicorn.run(app, host=host, port=port, log_level=LOG_LEVEL.lower())
