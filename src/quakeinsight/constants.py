import os

PACKAGE_PATH = os.path.dirname(os.path.abspath(__file__))

ALL_SCHEMAS_PATH = os.path.join(PACKAGE_PATH, "schemas", "all_schemas.yaml")
HISTORICAL_EARTHQUAKES_PATH = os.path.join(
    PACKAGE_PATH, "data", "historical_earthquakes.yaml"
)

DEFAULT_DB_PATH = os.path.join(os.getcwd(), "data", "quakeinsight.db")

USGS_QUERY_URL = "https://earthquake.usgs.gov/fdsnws/event/1/query"
FAST2SMS_URL = "https://www.fast2sms.com/dev/bulkV2"
TWILIO_MESSAGES_URL = (
    "https://api.twilio.com/2010-04-01/Accounts/{account_sid}/Messages.json"
)

# India bounding box
MIN_LATITUDE = 6.5
MAX_LATITUDE = 35.5
MIN_LONGITUDE = 68.0
MAX_LONGITUDE = 97.5

# fetch-earthquakes
RECENT_DAYS = 30
FETCH_LIMIT = 2000
ALL_MIN_MAGNITUDE = 4.5
EARLIEST_YEAR = 1900

# seed-earthquakes
SEED_YEARS = 50
SEED_MIN_MAGNITUDE = 3.0
SEED_LIMIT = 20000
BATCH_SIZE = 500

# events before this year are flagged as historical
HISTORICAL_CUTOFF_YEAR = 2000

DEFAULT_LABEL = "India"

USGS_SOURCE = "USGS"
HISTORICAL_SOURCE = "Historical Archive"
EXPORT_SOURCE = "National Center for Seismology (NCS) / USGS"

# duckdb table names
EARTHQUAKES_TABLE = "earthquakes"
