from __future__ import annotations

from enum import Enum
from typing import Annotated, List, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, model_validator


class Family(str, Enum):
    INHOUSE = "inhouse"
    EDIFACT = "edifact"
    VDA = "vda"
    XML_BIZTALK = "xml_biztalk"
    XML_ECOD = "xml_ecod"
    X12 = "x12"


class Recognition(str, Enum):
    RECOGNIZED = "recognized"
    UNSUPPORTED = "unsupported"
    UNRECOGNIZED = "unrecognized"


class EncodingSource(str, Enum):
    XML_DECLARATION = "xml_declaration"
    UTF8 = "utf8"
    BOM = "bom"
    UTF16_HEURISTIC = "utf16_heuristic"
    FALLBACK = "fallback"


class Classification(BaseModel):
    model_config = ConfigDict(frozen=True)

    recognition: Recognition
    family: Optional[Family] = None
    prefix: Optional[str] = None
    dialect: Optional[str] = Field(
        default=None,
        description="Label of a known dialect that has no parser.",
    )

    @property
    def has_parser_family(self) -> bool:
        return self.recognition is Recognition.RECOGNIZED and self.family is not None


class EdifactInterchange(BaseModel):
    model_config = ConfigDict(frozen=True)

    family: Literal[Family.EDIFACT] = Family.EDIFACT
    syntax_identifier: Optional[str] = None
    sender: Optional[str] = None
    recipient: Optional[str] = None
    prepared: Optional[str] = None
    control_reference: Optional[str] = None
    message_types: List[str] = Field(default_factory=list)
    segments: List[str] = Field(default_factory=list)


class VdaRecord(BaseModel):
    model_config = ConfigDict(frozen=True)

    record_type: str
    version: str
    content: str


class VdaInterchange(BaseModel):
    model_config = ConfigDict(frozen=True)

    family: Literal[Family.VDA] = Family.VDA
    records: List[VdaRecord] = Field(default_factory=list)


class InhouseInterchange(BaseModel):
    model_config = ConfigDict(frozen=True)

    family: Literal[Family.INHOUSE] = Family.INHOUSE
    header: str
    records: List[str] = Field(default_factory=list)


class XmlBiztalkInterchange(BaseModel):
    model_config = ConfigDict(frozen=True)

    family: Literal[Family.XML_BIZTALK] = Family.XML_BIZTALK
    root_tag: str
    documents: int = 0


class XmlEcodInterchange(BaseModel):
    model_config = ConfigDict(frozen=True)

    family: Literal[Family.XML_ECOD] = Family.XML_ECOD
    root_tag: str
    document_type: Optional[str] = None


Interchange = Annotated[
    Union[
        EdifactInterchange,
        VdaInterchange,
        InhouseInterchange,
        XmlBiztalkInterchange,
        XmlEcodInterchange,
    ],
    Field(discriminator="family"),
]


class LoadedDocument(BaseModel):
    model_config = ConfigDict(frozen=True)

    file_name: str = ""
    raw_content: bytes
    encoding: str
    encoding_source: EncodingSource
    text: str
    classification: Classification
    parse_error: Optional[str] = None
    interchange: Optional[Interchange] = None

    @model_validator(mode="after")
    def _interchange_xor_error(self) -> "LoadedDocument":
        if self.parse_error is not None and self.interchange is not None:
            raise ValueError("a document cannot carry both an interchange and a parse error")
        return self


class EncodingReport(BaseModel):
    resolved: str
    source: EncodingSource
    charset_hint: Optional[str] = Field(default=None, examples=[None])


class LoadResponse(BaseModel):
    file_name: str
    encoding: EncodingReport
    classification: Classification
    interchange: Optional[Interchange] = None
    parse_error: Optional[str] = None
    text: str


class PrettyResponse(BaseModel):
    file_name: str
    classification: Classification
    text: str


class HealthResponse(BaseModel):
    ok: bool = True
