"""
ChemSpider high-level connector.

Resolves chemical identifiers one item at a time:
- Free text / CAS number -> CSID (with disambiguation of multiple hits)
- CSID -> SMILES
- CSID -> extended compound information table

Every operation returns exactly one result per input, in input order.
Upstream failures are logged and recorded on the item instead of raised.

This connector uses ChemSpiderClient for HTTP and ChemSpiderNormalizer for
XML parsing.
"""

import logging
from typing import Iterable

from chemlookup.connectors.chemspider.client import ChemSpiderClient
from chemlookup.connectors.chemspider.normalizer import ChemSpiderNormalizer
from chemlookup.connectors.chemspider.resolution import Chooser, choose
from chemlookup.connectors.chemspider.schemas import (
    ExtendedInfoRow,
    ExtendedInfoTable,
    Resolution,
    ResolutionPolicy,
    ResolutionStatus,
)
from chemlookup.connectors.exceptions import ConnectorError
from chemlookup.connectors.settings import connector_settings

logger = logging.getLogger(__name__)

CsidInput = str | int | float | Resolution | None


def _as_text(item) -> str | None:
    """Stripped text of a scalar input; None for None, NaN and blanks."""
    # NaN is how pandas marks a missing cell
    if item is None or (isinstance(item, float) and item != item):
        return None
    # an int column with gaps comes back from pandas as floats
    if isinstance(item, float) and item.is_integer():
        item = int(item)
    text = str(item).strip()
    return text or None


def _as_csid(item: CsidInput) -> str | None:
    """CSID text for a lookup input; None for missing values."""
    if isinstance(item, Resolution):
        return item.value
    return _as_text(item)


def _as_list(items, scalar_types: tuple) -> list:
    if items is None or isinstance(items, scalar_types):
        return [items]
    return list(items)


class ChemSpiderConnector:
    """
    High-level ChemSpider connector.

    Example:
        async with ChemSpiderConnector(token="...") as connector:
            # CAS numbers -> CSIDs
            csids = await connector.get_csid(["107-06-2", "107-13-1"])

            # CSIDs -> SMILES (missing CSIDs pass through without a request)
            smiles = await connector.csid_to_smiles(csids)

            # CSIDs -> extended info, as a pandas DataFrame
            table = await connector.csid_to_ext(csids)
            df = table.to_dataframe()
    """

    def __init__(
        self,
        client: ChemSpiderClient | None = None,
        normalizer: ChemSpiderNormalizer | None = None,
        *,
        token: str | None = None,
        policy: ResolutionPolicy | str | None = None,
        chooser: Chooser | None = None,
    ):
        self._client = client
        self._token = token
        self._normalizer = normalizer or ChemSpiderNormalizer()
        self._owns_client = client is None
        self.chooser = chooser
        if policy is None and chooser is not None:
            policy = ResolutionPolicy.CALLBACK
        self.policy = ResolutionPolicy(
            policy or connector_settings.chemspider_resolution_policy
        )

    async def _get_client(self) -> ChemSpiderClient:
        """Lazy initialize client."""
        if self._client is None:
            self._client = ChemSpiderClient(token=self._token)
        return self._client

    def _resolve_policy(
        self,
        policy: ResolutionPolicy | str | None,
        chooser: Chooser | None,
    ) -> ResolutionPolicy:
        if policy is not None:
            return ResolutionPolicy(policy)
        if chooser is not None:
            return ResolutionPolicy.CALLBACK
        return self.policy

    # =========================================================================
    # Identifier Search
    # =========================================================================

    async def resolve_csid(
        self,
        query: str | int | None,
        *,
        policy: ResolutionPolicy | str | None = None,
        chooser: Chooser | None = None,
        verbose: bool = False,
    ) -> Resolution:
        """
        Resolve one search query (name, CAS number, ...) to a single CSID.

        Args:
            query: Search text
            policy: Multiple-hit policy (default: connector policy)
            chooser: Callback for ResolutionPolicy.CALLBACK
            verbose: Log request URL and parsed CSIDs at INFO

        Returns:
            Resolution with the CSID as value, or value None with the reason
        """
        query = _as_text(query) or ""
        if not query:
            logger.warning("ChemSpider empty query, skipping request")
            return Resolution.missing(query, ResolutionStatus.MISSING_INPUT)

        policy = self._resolve_policy(policy, chooser)
        chooser = chooser or self.chooser
        if policy == ResolutionPolicy.CALLBACK and chooser is None:
            raise ValueError("ResolutionPolicy.CALLBACK requires a chooser")

        client = await self._get_client()

        try:
            body = await client.simple_search(query, verbose=verbose)
            csids = self._normalizer.parse_csids(body)
        except ConnectorError as e:
            logger.warning(f"ChemSpider search failed for '{query}': {e}")
            return Resolution.missing(query, ResolutionStatus.FAILED, error=str(e))

        log = logger.info if verbose else logger.debug
        log(f"ChemSpider CSIDs for '{query}': {csids}")

        if not csids:
            logger.warning(f"ChemSpider CSID for '{query}' not found")
            return Resolution.missing(query, ResolutionStatus.NOT_FOUND)

        if len(csids) == 1:
            return Resolution(
                query=query,
                value=csids[0],
                status=ResolutionStatus.RESOLVED,
                candidates=csids,
            )

        chosen = await choose(query, csids, policy, chooser)
        if chosen is None:
            logger.warning(
                f"ChemSpider multiple matches ({len(csids)}) for '{query}', "
                f"no CSID returned"
            )
            return Resolution.missing(
                query, ResolutionStatus.AMBIGUOUS, candidates=csids
            )

        return Resolution(
            query=query,
            value=chosen,
            status=ResolutionStatus.RESOLVED,
            candidates=csids,
        )

    async def get_csid(
        self,
        queries: str | int | Iterable[str | int | None],
        *,
        policy: ResolutionPolicy | str | None = None,
        chooser: Chooser | None = None,
        verbose: bool = False,
    ) -> list[Resolution]:
        """
        Resolve each query to a CSID, sequentially and in input order.

        Returns:
            One Resolution per query
        """
        return [
            await self.resolve_csid(
                query, policy=policy, chooser=chooser, verbose=verbose
            )
            for query in _as_list(queries, (str, int, float))
        ]

    # =========================================================================
    # CSID -> SMILES
    # =========================================================================

    async def get_smiles(self, csid: CsidInput, *, verbose: bool = False) -> Resolution:
        """
        Look up the SMILES of one CSID.

        A missing CSID (None or a missing Resolution) is passed through
        without a request.
        """
        value = _as_csid(csid)
        if value is None:
            return Resolution.missing(None, ResolutionStatus.MISSING_INPUT)

        client = await self._get_client()

        try:
            body = await client.get_compound_info(value, verbose=verbose)
            info = self._normalizer.parse_compound_info(body)
        except ConnectorError as e:
            logger.warning(f"ChemSpider compound info failed for CSID {value}: {e}")
            return Resolution.missing(value, ResolutionStatus.FAILED, error=str(e))

        if verbose:
            logger.info(f"ChemSpider SMILES for CSID {value}: {info.smiles}")

        if info.smiles is None:
            logger.warning(f"ChemSpider SMILES for CSID {value} not found")
            return Resolution.missing(value, ResolutionStatus.NOT_FOUND)

        return Resolution(query=value, value=info.smiles, status=ResolutionStatus.RESOLVED)

    async def csid_to_smiles(
        self,
        csids: CsidInput | Iterable[CsidInput],
        *,
        verbose: bool = False,
    ) -> list[Resolution]:
        """Convert CSIDs to SMILES, one Resolution per input."""
        return [
            await self.get_smiles(csid, verbose=verbose)
            for csid in _as_list(csids, (str, int, float, Resolution))
        ]

    # =========================================================================
    # CSID -> Extended Info
    # =========================================================================

    async def get_extended_info(
        self,
        csid: CsidInput,
        *,
        verbose: bool = False,
    ) -> ExtendedInfoRow:
        """Fetch extended compound information for one CSID."""
        value = _as_csid(csid)
        if value is None:
            return ExtendedInfoRow(status=ResolutionStatus.MISSING_INPUT)

        client = await self._get_client()

        try:
            body = await client.get_extended_compound_info(value, verbose=verbose)
            fields = self._normalizer.parse_extended_info(body)
        except ConnectorError as e:
            logger.warning(f"ChemSpider extended info failed for CSID {value}: {e}")
            return ExtendedInfoRow(
                csid=value, status=ResolutionStatus.FAILED, error=str(e)
            )

        if verbose:
            logger.info(f"ChemSpider extended info for CSID {value}: {fields}")

        if not fields:
            logger.warning(f"ChemSpider extended info for CSID {value} is empty")
            return ExtendedInfoRow(csid=value, status=ResolutionStatus.NOT_FOUND)

        return ExtendedInfoRow(
            csid=value, status=ResolutionStatus.RESOLVED, fields=fields
        )

    async def csid_to_ext(
        self,
        csids: CsidInput | Iterable[CsidInput],
        *,
        verbose: bool = False,
    ) -> ExtendedInfoTable:
        """Fetch extended information for each CSID into a table, one row each."""
        return ExtendedInfoTable(
            rows=[
                await self.get_extended_info(csid, verbose=verbose)
                for csid in _as_list(csids, (str, int, float, Resolution))
            ]
        )

    # =========================================================================
    # Cleanup
    # =========================================================================

    async def close(self) -> None:
        """Close client if we own it."""
        if self._owns_client and self._client:
            await self._client.close()
            self._client = None

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.close()
