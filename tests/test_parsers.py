import pytest

from edi_intake.exceptions import InterchangeSyntaxError
from edi_intake.models import Family
from edi_intake.parsers import (
    EdifactParser,
    InhouseParser,
    VdaParser,
    XmlBiztalkParser,
    XmlEcodParser,
    vda_records,
)

from samples import BIZTALK_ENVELOPE, ECOD_INVOICE, EDIFACT_ORDERS


def test_edifact_envelope():
    interchange = EdifactParser().parse(EDIFACT_ORDERS)
    assert interchange.family is Family.EDIFACT
    assert interchange.syntax_identifier == "UNOC"
    assert interchange.sender == "SENDER"
    assert interchange.recipient == "RECIPIENT"
    assert interchange.prepared == "240101:1200"
    assert interchange.control_reference == "REF1"
    assert interchange.message_types == ["ORDERS"]
    assert len(interchange.segments) == 5


def test_edifact_with_custom_una():
    interchange = EdifactParser().parse("UNA:*.? ~UNB*UNOC:3*S*R*240101:1200*REF2~UNZ*0*REF2~")
    assert interchange.sender == "S"
    assert interchange.control_reference == "REF2"
    assert interchange.segments[0] == "UNA:*.? ~"


def test_edifact_without_unb():
    with pytest.raises(InterchangeSyntaxError, match="no UNB"):
        EdifactParser().parse("UNA:+.? 'UNH+1+ORDERS'")


def test_vda_fixed_width_records():
    text = "511" + "01" + "x" * 123 + "512" + "01" + "y" * 123
    interchange = VdaParser().parse(text)
    assert [r.record_type for r in interchange.records] == ["511", "512"]
    assert interchange.records[0].version == "01"


def test_vda_line_records():
    assert vda_records("51101abc\r\n51201def\r\n\r\n") == ["51101abc", "51201def"]


def test_vda_rejects_bad_record_type():
    with pytest.raises(InterchangeSyntaxError, match="record 2"):
        VdaParser().parse("51101\nABC01\n")


def test_inhouse():
    interchange = InhouseParser().parse("SYS|HDR\nLINE1\n\nLINE2\n")
    assert interchange.header == "SYS|HDR"
    assert interchange.records == ["LINE1", "LINE2"]


def test_inhouse_requires_sys_header():
    with pytest.raises(InterchangeSyntaxError):
        InhouseParser().parse("\n")


def test_biztalk():
    interchange = XmlBiztalkParser().parse(BIZTALK_ENVELOPE.decode("utf-8"))
    assert interchange.root_tag == "biztalk_1"
    assert interchange.documents == 2


def test_ecod():
    interchange = XmlEcodParser().parse(ECOD_INVOICE.decode("cp1252"))
    assert interchange.root_tag == "Document-Invoice"
    assert interchange.document_type == "Invoice"


def test_malformed_xml():
    with pytest.raises(InterchangeSyntaxError, match="malformed XML"):
        XmlEcodParser().parse("<Document-Invoice><open></Document-Invoice>")


def test_edifact_envelope_values_are_unescaped():
    interchange = EdifactParser().parse(
        "UNB+UNOC:3+ACME?+CO:14+R?:S:14+240101:1200+REF?'1'UNZ+0+REF?'1'"
    )
    assert interchange.sender == "ACME+CO"
    assert interchange.recipient == "R:S"
    assert interchange.control_reference == "REF'1"
