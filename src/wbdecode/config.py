import re
from pathlib import Path

# HTTP identity and base endpoints
HEADERS = {"User-Agent": "wbdecode/0.1 (Wikibase response decoder; python-requests)"}
API_ENDPOINT = "https://www.wikidata.org/w/api.php"

# Transport tuning knobs
API_TIMEOUT = 30  # Seconds per HTTP request
MAX_RETRIES = 4  # Attempts per request before giving up
GET_ENTITIES_BATCH_SIZE = 50  # wbgetentities id limit for anonymous clients
SEARCH_LIMIT = 7  # wbsearchentities default page size

# Decoding defaults
DEFAULT_LANGUAGE = "en"
COMMONS_FILE_URL = "https://commons.wikimedia.org/wiki/File:"
UNITLESS_UNIT = "1"  # Quantity unit for dimensionless amounts

# Identifier and value patterns
QID_EXACT_PATTERN = re.compile(r"^Q\d+$")
PID_EXACT_PATTERN = re.compile(r"^P\d+$")
UNIT_ID_PATTERN = re.compile(r"Q(\d+)$")
WIKIBASE_TIME_PATTERN = re.compile(
    r"^(?P<year>[+-]?\d+)-(?P<month>\d{1,2})-(?P<day>\d{1,2})"
    r"T(?P<hour>\d{1,2}):(?P<minute>\d{1,2}):(?P<second>\d{1,2})Z$"
)

# Time precision codes as published in the Wikibase data model.
# Codes 0-5 are geological scales, 6-8 historical, 9-14 calendar fields.
TIME_PRECISION_CODES = {
    0: "billion_years",
    1: "hundred_million_years",
    2: "ten_million_years",
    3: "million_years",
    4: "hundred_thousand_years",
    5: "ten_thousand_years",
    6: "millennium",
    7: "century",
    8: "decade",
    9: "year",
    10: "month",
    11: "day",
    12: "hour",
    13: "minute",
    14: "second",
}

# Year bucket size for every precision coarser than a single year
PRECISION_YEAR_UNITS = {
    "billion_years": 1_000_000_000,
    "hundred_million_years": 100_000_000,
    "ten_million_years": 10_000_000,
    "million_years": 1_000_000,
    "hundred_thousand_years": 100_000,
    "ten_thousand_years": 10_000,
    "millennium": 1_000,
    "century": 100,
    "decade": 10,
}

# Packaged JSON Schemas used for structural validation
SCHEMA_DIR = Path(__file__).resolve().parent / "schemas"
ENTITY_SCHEMA_FILE = SCHEMA_DIR / "entity.schema.json"
SNAK_SCHEMA_FILE = SCHEMA_DIR / "snak.schema.json"

# Dump scanning
PROGRESS_HEARTBEAT_SECONDS = 30
