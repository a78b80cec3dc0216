"""Decides whether a decoded immunization is one of the vaccinations we are looking for"""

import dataclasses
from collections.abc import Mapping

from vaccine_check.decoder import NormalizedImmunization


@dataclasses.dataclass(frozen=True)
class MatchOutcome:
    display_name: str
    occurred_on: str
    product_code: str

    @property
    def message(self) -> str:
        """Human-readable summary, like 'Pfizer. 2021-03-01'"""
        return f"{self.display_name}. {self.occurred_on}"


def match(fact: NormalizedImmunization, table: Mapping[str, str]) -> MatchOutcome | None:
    """
    Looks up the immunization's product code in the code table.

    The lookup is an exact string match. A miss is not an error, it just means this record isn't the
    vaccination we want.
    """
    display_name = table.get(fact.product_code)
    if display_name is None:
        return None
    return MatchOutcome(display_name, fact.occurred_on, fact.product_code)
