"""
Startup script to run the Stock Tracker viewer (Streamlit) and API (FastAPI) in the same container.
"""

import os
import subprocess
import threading
import time
import logging
import socket

# Set up comprehensive logging
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
    handlers=[
        logging.StreamHandler()
    ]
)
logger = logging.getLogger(__name__)

def pick_port(preferred, attempts=10):
    """First port from `preferred` that nothing on localhost is listening on"""
    for port in range(preferred, preferred + attempts):
        with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as sock:
            if sock.connect_ex(('localhost', port)) != 0:
                if port != preferred:
                    logger.info(f"Port {preferred} is in use, using port {port} instead")
                return port
    logger.warning(f"No free port in {preferred}-{preferred + attempts - 1}, trying {preferred} anyway")
    return preferred

def run_streamlit(port, api_port):
    """Run the Streamlit viewer pointed at the local inventory API"""
    env = dict(os.environ)
    env.setdefault("INVENTORY_API_URL", f"http://localhost:{api_port}/api/inventory")

    logger.info(f"🚀 Starting Stock Tracker viewer on port {port} (API: {env['INVENTORY_API_URL']})...")
    try:
        subprocess.run([
            "streamlit", "run", "app.py",
            "--server.port", str(port),
            "--server.address", "0.0.0.0",
            "--server.headless", "true",
        ], check=True, env=env)
    except subprocess.CalledProcessError as e:
        logger.error(f"❌ Streamlit failed: {e}")
        raise

def run_fastapi(port):
    """Run the inventory API"""
    logger.info(f"🚀 Starting inventory API on port {port}...")
    try:
        subprocess.run([
            "uvicorn", "api:app",
            "--host", "0.0.0.0",
            "--port", str(port),
        ], check=True)
    except subprocess.CalledProcessError as e:
        logger.error(f"❌ FastAPI failed: {e}")
        raise

def main():
    """Start both applications"""
    logger.info("🌟 Starting Stock Tracker...")

    # Get the port from Cloud Run environment variable or use default
    api_port = pick_port(int(os.environ.get("PORT", 8080)))

    api_thread = threading.Thread(target=run_fastapi, args=(api_port,), daemon=True)
    api_thread.start()

    # Give FastAPI a moment to start
    time.sleep(2)

    streamlit_port = pick_port(8501)
    run_streamlit(streamlit_port, api_port)

if __name__ == "__main__":
    main()
