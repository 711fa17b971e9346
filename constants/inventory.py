"""
Inventory constants for the Stock Tracker application.
Contains the spreadsheet location, the recognized columns and the Google API scopes.
"""

# Inventory tracker spreadsheet
GOOGLE_SHEET_NAME = "Inventory tracker"
WORKSHEET_NAME = "Stock Summary"
SPREADSHEET_MIME_TYPE = "application/vnd.google-apps.spreadsheet"

# Columns read from the header row, in display order
REQUIRED_COLUMNS = ["Item Name", "color", "size", "length", "Total Stock"]

# Total Stock is never matched against search
SEARCHABLE_COLUMNS = ["Item Name", "color", "size", "length"]

# Row 0 is the header, row 1 is always skipped
DATA_START_ROW = 2

# Read-only access to sheet values and the Drive file index
SCOPES = [
    "https://www.googleapis.com/auth/spreadsheets.readonly",
    "https://www.googleapis.com/auth/drive.readonly",
]

# Fixed OAuth endpoints for service account credentials
AUTH_URI = "https://accounts.google.com/o/oauth2/auth"
TOKEN_URI = "https://oauth2.googleapis.com/token"
AUTH_PROVIDER_X509_CERT_URL = "https://www.googleapis.com/oauth2/v1/certs"

# Viewer defaults
DEFAULT_INVENTORY_API_URL = "http://localhost:8001/api/inventory"
