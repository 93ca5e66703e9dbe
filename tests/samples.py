import codecs

EDIFACT_ORDERS = (
    "UNB+UNOC:3+SENDER:14+RECIPIENT:14+240101:1200+REF1'"
    "UNH+1+ORDERS:D:96A:UN'"
    "BGM+220+PO?'1'"
    "UNT+3+1'"
    "UNZ+1+REF1'"
)

ECOD_INVOICE = (
    b'<?xml version="1.0" encoding="windows-1252"?>'
    b"<Document-Invoice><Invoice-Header><InvoiceNumber>F\xe91</InvoiceNumber>"
    b"</Invoice-Header></Document-Invoice>"
)

BIZTALK_ENVELOPE = (
    b'<?xml version="1.0" encoding="utf-8"?>'
    b'<biztalk_1 xmlns="urn:schemas-biztalk-org:biztalk:biztalk_1">'
    b"<header/><body><doc1/><doc2/></body></biztalk_1>"
)


def codec_name(name):
    return codecs.lookup(name).name


ECOD_INVOICE_UTF16 = (
    '<?xml version="1.0" encoding="utf-16"?>'
    "<Document-Invoice><Invoice-Header><InvoiceNumber>Ž1</InvoiceNumber>"
    "</Invoice-Header></Document-Invoice>"
)
