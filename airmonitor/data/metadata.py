ID_COLUMN = "deviceDeploymentID"
DATETIME_COLUMN = "datetime"

CORE_METADATA_NAMES = [
    "deviceDeploymentID",
    "deviceID",
    "deviceType",
    "deviceDescription",
    "pollutant",
    "units",
    "dataIngestSource",
    "locationID",
    "locationName",
    "longitude",
    "latitude",
    "elevation",
    "countryCode",
    "stateCode",
    "countyName",
    "timezone",
    "AQSID",
    "fullAQSID",
]

NUMERIC_METADATA_NAMES = ["longitude", "latitude", "elevation"]

NA_TOKEN = "NA"


def missing_core_names(columns: list[str]) -> list[str]:
    present = set(columns)
    return [name for name in CORE_METADATA_NAMES if name not in present]
