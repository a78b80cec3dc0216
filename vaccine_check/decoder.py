"""
Decodes raw immunization records into a simple (code, date) fact.

Records come tagged with the FHIR release they were written in, and the two releases we support
disagree about the shape of an Immunization:

- DSTU2 (LEGACY_V1) keeps the administration date in `date`
- R4 (CURRENT_V2) has no `date`, and we read `recorded` instead

Both keep the vaccine product in `vaccineCode.coding`.

Only the FIRST coding entry is ever consulted (see CODING_INDEX). A record that lists the product code
we are looking for in a later coding entry will not be decoded to that code. This mirrors long-standing
behavior and is kept on purpose until someone decides whether later entries should count too.
"""

import dataclasses
import datetime
import enum

import pydantic

from vaccine_check import fhir
from vaccine_check.errors import DecodeCause, DecodeError

# Which entry of vaccineCode.coding holds the product code (the others are ignored)
CODING_INDEX = 0

RESOURCE_TYPE = "Immunization"


class SchemaVersion(enum.Enum):
    """The FHIR releases an immunization record might be written in"""

    LEGACY_V1 = "DSTU2"
    CURRENT_V2 = "R4"
    UNRECOGNIZED = "unrecognized"

    @classmethod
    def from_fhir_version(cls, version: str | None) -> "SchemaVersion":
        """
        Maps a declared FHIR version to a schema version.

        Accepts release names ("DSTU2", "R4") or version numbers ("1.0.2", "4.0.1").
        Anything else (including STU3 or R4B) is unrecognized.
        """
        version = (version or "").strip().casefold()
        if version == "dstu2":
            return cls.LEGACY_V1
        if version == "r4":
            return cls.CURRENT_V2

        major_minor = version.split(".")[:2]
        if major_minor == ["1", "0"]:
            return cls.LEGACY_V1
        if major_minor == ["4", "0"]:
            return cls.CURRENT_V2
        return cls.UNRECOGNIZED


@dataclasses.dataclass(frozen=True, kw_only=True)
class RawRecord:
    """One immunization record, exactly as the record store handed it to us"""

    schema_version: SchemaVersion
    data: bytes | str | dict  # raw JSON, or an already-parsed JSON object
    resource_type: str = RESOURCE_TYPE
    source: str | None = None  # where this record came from, for logging


@dataclasses.dataclass(frozen=True)
class NormalizedImmunization:
    product_code: str
    occurred_on: str  # FHIR date/dateTime text, as recorded

    @property
    def occurred_at(self) -> datetime.datetime:
        return fhir.parse_datetime(self.occurred_on)


def decode(raw: RawRecord) -> NormalizedImmunization:
    """
    Decodes a raw record according to its declared schema version.

    :raises DecodeError: if the record can't be decoded for any reason
    """
    match raw.schema_version:
        case SchemaVersion.LEGACY_V1:
            immunization = _parse(raw, fhir.ImmunizationDstu2)
            date_field, date_value = "date", immunization.date
        case SchemaVersion.CURRENT_V2:
            immunization = _parse(raw, fhir.ImmunizationR4)
            date_field, date_value = "recorded", immunization.recorded
        case _:
            # Fail closed for anything we don't explicitly know how to read
            raise DecodeError(
                raw.resource_type,
                DecodeCause.UNSUPPORTED_VERSION,
                detail=f"schema version {raw.schema_version.value}",
            )

    product_code = _get_product_code(raw, immunization.vaccineCode)
    occurred_on = _get_date(raw, date_field, date_value)
    return NormalizedImmunization(product_code, occurred_on)


def _parse(raw: RawRecord, model: type[pydantic.BaseModel]) -> pydantic.BaseModel:
    try:
        if isinstance(raw.data, (bytes, bytearray, str)):
            return model.model_validate_json(raw.data)
        return model.model_validate(raw.data)
    except pydantic.ValidationError as exc:
        raise DecodeError(
            raw.resource_type, DecodeCause.MALFORMED_PAYLOAD, detail=_summarize(exc)
        ) from exc


def _summarize(exc: pydantic.ValidationError) -> str:
    """Returns a short description of the first validation problem"""
    first = exc.errors(include_url=False)[0]
    location = ".".join(str(piece) for piece in first["loc"])
    return f"{location}: {first['msg']}" if location else first["msg"]


def _missing(raw: RawRecord, field: str) -> DecodeError:
    return DecodeError(raw.resource_type, DecodeCause.MISSING_FIELD, field=field)


def _get_product_code(raw: RawRecord, concept: fhir.CodeableConcept | None) -> str:
    if concept is None:
        raise _missing(raw, "vaccineCode")
    if not concept.coding:
        raise _missing(raw, "vaccineCode.coding")

    # FHIR forbids empty strings, so we treat one (or a null coding entry) like a missing code
    coding = concept.coding[CODING_INDEX]
    code = coding.code if coding else None
    if not code:
        raise _missing(raw, f"vaccineCode.coding[{CODING_INDEX}].code")

    return code


def _get_date(raw: RawRecord, field: str, value: str | None) -> str:
    if not value:
        raise _missing(raw, field)
    if fhir.parse_datetime(value) is None:
        raise DecodeError(raw.resource_type, DecodeCause.MALFORMED_DATE, field=field, detail=value)
    return value
