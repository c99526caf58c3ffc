"""
Public chemistry database connectors.

Connectors:
- ChemSpider: CSID search, SMILES and extended compound information

Connectors share:
- Settings from environment variables (pydantic-settings)
- A fixed delay after every request
- Consistent error types and logging
"""

from chemlookup.connectors.chemspider import ChemSpiderConnector
from chemlookup.connectors.exceptions import ConnectorError, RateLimitError

__all__ = [
    "ConnectorError",
    "RateLimitError",
    "ChemSpiderConnector",
]
