"""
The FHIR Immunization shapes we know how to read.

These are deliberately partial: only the fields we consult are modeled, and every other field is ignored.
Fields we need are still optional here, so that their absence can be reported precisely by the caller
rather than as a generic validation failure.
"""

from typing import Literal

import pydantic


class FhirElement(pydantic.BaseModel):
    model_config = pydantic.ConfigDict(extra="ignore", frozen=True)


class Coding(FhirElement):
    system: str | None = None
    code: str | None = None
    display: str | None = None


class CodeableConcept(FhirElement):
    coding: list[Coding | None] | None = None  # null entries are tolerated, see decoder
    text: str | None = None


class ImmunizationDstu2(FhirElement):
    """
    Immunization as of FHIR DSTU2 (1.0.2).

    See https://hl7.org/fhir/DSTU2/immunization.html
    """

    resourceType: Literal["Immunization"]
    id: str | None = None
    status: str | None = None
    date: str | None = None  # when the vaccine was administered (or was to be administered)
    vaccineCode: CodeableConcept | None = None
    wasNotGiven: bool | None = None


class ImmunizationR4(FhirElement):
    """
    Immunization as of FHIR R4 (4.0.1).

    See https://hl7.org/fhir/R4/immunization.html
    """

    resourceType: Literal["Immunization"]
    id: str | None = None
    status: str | None = None
    vaccineCode: CodeableConcept | None = None
    occurrenceDateTime: str | None = None
    recorded: str | None = None  # when the immunization was first captured in the subject's record
