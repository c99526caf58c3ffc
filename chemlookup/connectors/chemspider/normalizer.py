"""
ChemSpider data normalizer.

Transforms raw ChemSpider XML responses into plain Python values and typed
schemas. The web service wraps every payload in the
``http://www.chemspider.com/`` namespace; element names are compared by
local name so the namespace never leaks into results.
"""

import logging
from xml.etree import ElementTree as ET

from chemlookup.connectors.chemspider.schemas import CompoundInfo
from chemlookup.connectors.exceptions import MalformedResponseError

logger = logging.getLogger(__name__)

CONNECTOR_NAME = "chemspider"


def local_name(tag: str) -> str:
    """Strip an ``{namespace}`` prefix from an element tag."""
    return tag.rsplit("}", 1)[-1]


def _text(element: ET.Element) -> str | None:
    text = (element.text or "").strip()
    return text or None


class ChemSpiderNormalizer:
    """
    Normalizes raw ChemSpider XML responses.

    Usage:
        normalizer = ChemSpiderNormalizer()

        csids = normalizer.parse_csids(search_xml)         # ["2157", ...]
        info = normalizer.parse_compound_info(info_xml)    # CompoundInfo
        fields = normalizer.parse_extended_info(ext_xml)   # {"CSID": "2157", ...}
    """

    SEARCH_ROOT = "ArrayOfInt"
    COMPOUND_INFO_ROOT = "CompoundInfo"
    EXTENDED_INFO_ROOT = "ExtendedCompoundInfo"

    # =========================================================================
    # Parsing
    # =========================================================================

    def parse(self, body: str | bytes, expected_root: str | None = None) -> ET.Element:
        """
        Parse a response body into an element tree.

        Args:
            body: Raw XML response
            expected_root: Local name the document element must have

        Returns:
            Document element

        Raises:
            MalformedResponseError: Body is not XML or has the wrong root
        """
        if isinstance(body, str):
            body = body.encode("utf-8")

        try:
            root = ET.fromstring(body)
        except ET.ParseError as e:
            raise MalformedResponseError(
                f"Invalid XML response: {e}",
                connector=CONNECTOR_NAME,
                response_body=body[:500],
            ) from e

        if expected_root and local_name(root.tag) != expected_root:
            raise MalformedResponseError(
                f"Expected <{expected_root}> but got <{local_name(root.tag)}>",
                connector=CONNECTOR_NAME,
                element=local_name(root.tag),
                response_body=body[:500],
            )
        return root

    def parse_fields(self, root: ET.Element) -> dict[str, str | None]:
        """Walk the direct children of ``root`` into ``{local name: text}``."""
        return {local_name(child.tag): _text(child) for child in root}

    # =========================================================================
    # Endpoint-specific Extraction
    # =========================================================================

    def parse_csids(self, body: str | bytes) -> list[str]:
        """
        Extract CSIDs from a SimpleSearch response.

        <ArrayOfInt><int>2157</int><int>...</int></ArrayOfInt>
        """
        root = self.parse(body, self.SEARCH_ROOT)
        return [value for value in (_text(child) for child in root) if value]

    def parse_compound_info(self, body: str | bytes) -> CompoundInfo:
        """Extract identifiers from a GetCompoundInfo response."""
        fields = self.parse_fields(self.parse(body, self.COMPOUND_INFO_ROOT))
        return CompoundInfo(
            csid=fields.get("CSID"),
            inchi=fields.get("InChI"),
            inchikey=fields.get("InChIKey"),
            smiles=fields.get("SMILES"),
        )

    def parse_extended_info(self, body: str | bytes) -> dict[str, str | None]:
        """
        Extract every field of a GetExtendedCompoundInfo response.

        The field set is exactly what the service sends, in document order.
        """
        return self.parse_fields(self.parse(body, self.EXTENDED_INFO_ROOT))
