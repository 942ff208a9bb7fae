"""Select-field options shared by the step schemas and the profile editor.

Each entry is (stored value, display label).
"""

ENTITY_TYPES: list[tuple[str, str]] = [
    ("limited-company", "Limited Company"),
    ("partnership", "Partnership"),
    ("sole-trader", "Sole Trader"),
    ("llp", "Limited Liability Partnership"),
    ("plc", "Public Limited Company"),
    ("charity", "Charity"),
    ("other", "Other"),
]

GOODS_OR_SERVICES: list[tuple[str, str]] = [
    ("physical-goods", "Physical goods"),
    ("digital-goods", "Digital goods"),
    ("services", "Services"),
    ("mixed", "Mixed (goods and services)"),
]

DOCUMENT_TYPES: list[tuple[str, str]] = [
    ("passport", "Passport"),
    ("national-id", "National ID Card"),
    ("drivers-license", "Driver's License"),
]

ANNUAL_INCOME_RANGES: list[tuple[str, str]] = [
    ("0-50k", "$0 - $50,000"),
    ("50k-100k", "$50,000 - $100,000"),
    ("100k-250k", "$100,000 - $250,000"),
    ("250k-500k", "$250,000 - $500,000"),
    ("500k-1m", "$500,000 - $1,000,000"),
    ("1m+", "$1,000,000+"),
]


def values(options: list[tuple[str, str]]) -> list[str]:
    return [value for value, _ in options]
