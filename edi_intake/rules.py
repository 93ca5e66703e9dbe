"""
Fixed detection tables.

Read-only after import. Order matters where noted.
"""

# Checked in order; the 4-byte UTF-32 signature must precede the 2-byte ones.
BOM_SIGNATURES = (
    (b"\x00\x00\xfe\xff", "utf-32-be"),
    (b"\xef\xbb\xbf", "utf-8"),
    (b"\x2b\x2f\x76", "utf-7"),
    (b"\xfe\xff", "utf-16-be"),
    (b"\xff\xfe", "utf-16-le"),
)

DEFAULT_LEGACY_ENCODING = "cp1250"
UTF16_HEURISTIC_ENCODING = "utf-16-le"
UTF16_HEURISTIC_OFFSETS = (1, 3, 5)

XML_PROLOG = "<?xml"
BIZTALK_MARKER = "<biztalk_1"
ECOD_MARKER = "<Document-"

PREFIX_LENGTH = 3

INHOUSE_PREFIXES = frozenset({"SYS"})
EDIFACT_PREFIXES = frozenset({"UNA", "UNB"})
VDA_PREFIXES = frozenset({"511", "551", "661", "711", "821"})

# Known dialect headers without a parser: prefix -> dialect label.
UNSUPPORTED_PREFIXES = {
    "EDI": "edi",
    "HDR": "hdr",
    "ISA": "x12",
}

VDA_RECORD_LENGTH = 128
LINE_BREAK = "\r\n"
