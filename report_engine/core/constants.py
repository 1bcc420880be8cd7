# Sheet layout row heights
TITLE_ROW_HEIGHT = 35
METADATA_ROW_HEIGHT = 22
HEADER_ROW_HEIGHT = 28

# Fill / font colors per conditional style tag
STYLE_TAG_COLORS = {
    "good": {"fill": "D4EDDA", "font": "155724"},
    "neutral": {"fill": "D1ECF1", "font": "0C5460"},
    "warning": {"fill": "FFF3CD", "font": "856404"},
    "bad": {"fill": "F8D7DA", "font": "721C24"},
}

MEDIA_TYPES = {
    "xlsx": "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
    "csv": "text/csv",
}

EMPTY_CELL = ""
MISSING_TEXT = "-"
