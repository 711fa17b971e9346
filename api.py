"""
FastAPI endpoints for the Stock Tracker app.
This runs alongside the Streamlit viewer in the same container.
"""

import logging

from dotenv import load_dotenv
from fastapi import Depends, FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
import uvicorn

from utils.credentials import GoogleCredentialsConfig
from utils.inventory_reader import InventoryError, InventoryReader

# Load environment variables
load_dotenv()

# Set up logging
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
    handlers=[
        logging.StreamHandler()
    ]
)
logger = logging.getLogger(__name__)

# Make sure other loggers are also set to INFO level
logging.getLogger('utils.inventory_reader').setLevel(logging.INFO)
logging.getLogger('utils.google_sheets').setLevel(logging.INFO)

NO_STORE = {"Cache-Control": "no-store"}

# Create FastAPI app
app = FastAPI(
    title="Stock Tracker API",
    description="Read-only inventory from the Inventory tracker spreadsheet",
    version="1.0.0"
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["GET", "OPTIONS"],
    allow_headers=["Content-Type"],
)


def get_inventory_reader() -> InventoryReader:
    """Build a reader from the current environment for each request"""
    return InventoryReader(GoogleCredentialsConfig.from_env())


@app.get("/")
async def root():
    """Health check endpoint"""
    return {"message": "Stock Tracker API is running", "status": "healthy"}


@app.get("/api/inventory")
def get_inventory(reader: InventoryReader = Depends(get_inventory_reader)):
    """
    Return the current inventory as {data, headers}.

    Errors come back as {error} with 404 when the spreadsheet is missing,
    or 500 (plus details) for configuration and fetch failures.
    """
    try:
        inventory = reader.fetch_inventory()
        return JSONResponse(status_code=200, content=inventory.to_dict(), headers=NO_STORE)
    except InventoryError as e:
        logger.error(f"❌ Inventory request failed ({e.status_code}): {e.message}")
        return JSONResponse(status_code=e.status_code, content=e.to_dict(), headers=NO_STORE)
    except Exception as e:
        logger.error(f"❌ Unexpected error in inventory endpoint: {str(e)}")
        return JSONResponse(
            status_code=500,
            content={"error": "Failed to fetch inventory data", "details": str(e)},
            headers=NO_STORE,
        )


@app.get("/api/health")
async def health_check():
    """Detailed health check with configuration status"""
    config = GoogleCredentialsConfig.from_env()
    return {
        "status": "healthy",
        "environment": {
            "google_credentials": config.is_configured,
            "google_project_id": bool(config.project_id),
        },
        "endpoints": {
            "inventory": "/api/inventory",
            "health": "/api/health"
        }
    }


if __name__ == "__main__":
    # This allows running the API standalone for testing
    uvicorn.run(app, host="0.0.0.0", port=8001)
