"""Checks FHIR immunization records for a specific vaccination"""

__version__ = "1.0.0"
