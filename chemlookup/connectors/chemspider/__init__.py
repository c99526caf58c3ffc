"""
ChemSpider connector package.

Provides:
- ChemSpiderClient: Low-level HTTP client with request throttling
- ChemSpiderNormalizer: Parses ChemSpider XML responses
- ChemSpiderConnector: Per-item identifier resolution (CSID, SMILES, extended info)
- get_csid / csid_to_smiles / csid_to_ext: Synchronous helpers
"""

from chemlookup.connectors.chemspider.api import (
    csid_to_ext,
    csid_to_smiles,
    get_csid,
)
from chemlookup.connectors.chemspider.client import ChemSpiderClient, RequestThrottle
from chemlookup.connectors.chemspider.connector import ChemSpiderConnector
from chemlookup.connectors.chemspider.normalizer import ChemSpiderNormalizer
from chemlookup.connectors.chemspider.resolution import choose, console_prompt
from chemlookup.connectors.chemspider.schemas import (
    CompoundInfo,
    ExtendedInfoRow,
    ExtendedInfoTable,
    Resolution,
    ResolutionPolicy,
    ResolutionStatus,
)

__all__ = [
    # Client
    "ChemSpiderClient",
    "RequestThrottle",
    # Connector
    "ChemSpiderConnector",
    # Normalizer
    "ChemSpiderNormalizer",
    # Disambiguation
    "choose",
    "console_prompt",
    # Schemas
    "CompoundInfo",
    "ExtendedInfoRow",
    "ExtendedInfoTable",
    "Resolution",
    # Enums
    "ResolutionPolicy",
    "ResolutionStatus",
    # Synchronous helpers
    "get_csid",
    "csid_to_smiles",
    "csid_to_ext",
]
