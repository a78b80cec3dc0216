"""Support for handling the FHIR spec"""

from .fhir_models import CodeableConcept, Coding, ImmunizationDstu2, ImmunizationR4
from .fhir_utils import aware_datetime, parse_datetime
