# Wire statuses for the pallet validation result
STATUS_VALID = "VALID"
STATUS_INVALID_JSON = "INVALID_JSON"
STATUS_MISSING_DATA = "MISSING_DATA"

MISSING_INPUT_MESSAGE = "Pallet_array_JSON field is empty or missing"
MALFORMED_INPUT_PREFIX = "Pallet_array_JSON is malformed or invalid JSON: "

MISSING_TOTAL_PALLETS = "Missing totalPallets field in JSON"
MISSING_PALLETS_ARRAY = "Missing or empty pallets array in JSON"
PALLET_MISSING_NUMBER = "Pallet {pallet} missing palletNumber"
PALLET_MISSING_FIELD = "Pallet {pallet} missing or empty {field}"
PALLET_MISSING_ITEMS = "Pallet {pallet} missing or empty items array"
ITEM_MISSING_FIELD = "Pallet {pallet} Item {item} missing or empty {field}"

# Item fields checked with JSON truthiness, in report order
ITEM_TEXT_FIELDS = ("vpn", "ediUom", "poLineNumber")
