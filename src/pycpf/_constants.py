"""Internal constants shared across the library."""

PROPERTIES_FILE = "config.properties"

# Repository path of the shared CPF settings, relative to the plugin's own
# repository folder.
GLOBAL_SETTINGS_PATH = "../cpf"

# Plugin system folder itself.
SYSTEM_SETTINGS_PATH = ""

CDA_BASE_URL = "http://localhost:8080/pentaho/plugin/cda/api"
CDA_QUERY_ENDPOINT = "doQuery"
CDA_DEFAULT_OUTPUT_TYPE = "json"

# CDA joins array parameter values with this separator.
CDA_ARRAY_SEPARATOR = ";"

# Java integer ranges honoured by the typed property getters.
INT_MIN = -(2**31)
INT_MAX = 2**31 - 1
LONG_MIN = -(2**63)
LONG_MAX = 2**63 - 1

# Seconds allowed for a single CDA request.
REQUEST_TIMEOUT = 30.0
