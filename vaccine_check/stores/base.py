"""Base abstract record store"""

import abc

from vaccine_check import decoder, store

# How many records to look at, at most
DEFAULT_LIMIT = 100


class RecordStore(abc.ABC):
    """
    An abstraction for where a user's immunization records live

    Subclass this to provide a different source of records.
    """

    def __init__(self, root: store.Root):
        """
        Initialize a new RecordStore class
        :param root: the base location to read records from
        """
        self.root = root

    @abc.abstractmethod
    async def request_authorization(self) -> bool:
        """
        Asks for permission to read the user's immunization records.

        :returns: whether permission was granted
        """

    @abc.abstractmethod
    async def fetch_immunizations(self, limit: int = DEFAULT_LIMIT) -> list[decoder.RawRecord]:
        """
        Retrieves immunization records, most recent first.

        :param limit: the maximum number of records to return
        :returns: the raw records, ready for decoding
        :raises StoreUnreadableError: if the records could not be read at all
        """
