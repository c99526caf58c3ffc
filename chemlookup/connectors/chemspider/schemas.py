"""
ChemSpider-specific schemas for resolution results.

A `Resolution` carries one input item through the pipeline. Its `value` is
`None` whenever no usable result exists; `status` says why.
"""

from enum import Enum
from typing import Any

from pydantic import BaseModel, Field


# =============================================================================
# Enums
# =============================================================================


class ResolutionStatus(str, Enum):
    """Outcome of resolving one input item."""

    RESOLVED = "resolved"
    NOT_FOUND = "not_found"
    AMBIGUOUS = "ambiguous"
    FAILED = "failed"
    MISSING_INPUT = "missing_input"


class ResolutionPolicy(str, Enum):
    """How a search with several hits is narrowed down to one CSID."""

    FIRST_MATCH = "first_match"
    FAIL = "fail"
    CALLBACK = "callback"


# =============================================================================
# Per-item Results
# =============================================================================


class Resolution(BaseModel):
    """
    Result of resolving a single query item or CSID.

    `query` is the input as given (search text for `get_csid`, the CSID for
    `csid_to_smiles`), `value` the CSID or SMILES.
    """

    query: str | None = None
    value: str | None = None
    status: ResolutionStatus
    candidates: list[str] = Field(
        default_factory=list,
        description="All CSIDs returned by a search (empty for lookups)",
    )
    error: str | None = Field(None, description="Upstream error message, if any")

    @property
    def is_missing(self) -> bool:
        return self.value is None

    @classmethod
    def missing(
        cls,
        query: str | None,
        status: ResolutionStatus,
        **kwargs: Any,
    ) -> "Resolution":
        return cls(query=query, value=None, status=status, **kwargs)


# =============================================================================
# Compound Info
# =============================================================================


class CompoundInfo(BaseModel):
    """Parsed GetCompoundInfo response."""

    csid: str | None = None
    inchi: str | None = None
    inchikey: str | None = None
    smiles: str | None = None


class ExtendedInfoRow(BaseModel):
    """
    One row of extended compound information.

    `fields` maps the element names of the ExtendedCompoundInfo response
    (CSID, MF, SMILES, InChI, AverageMass, ...) to their text values, in
    document order. Rows for missing or failed inputs have no fields.
    """

    csid: str | None = None
    status: ResolutionStatus
    fields: dict[str, str | None] = Field(default_factory=dict)
    error: str | None = None

    @property
    def is_missing(self) -> bool:
        return self.status != ResolutionStatus.RESOLVED


class ExtendedInfoTable(BaseModel):
    """Extended compound information for a sequence of CSIDs, one row each."""

    rows: list[ExtendedInfoRow] = Field(default_factory=list)

    def __len__(self) -> int:
        return len(self.rows)

    @property
    def columns(self) -> list[str]:
        """Union of field names across rows, in first-seen order."""
        seen: dict[str, None] = {}
        for row in self.rows:
            for name in row.fields:
                seen.setdefault(name, None)
        return list(seen)

    def records(self) -> list[dict[str, str | None]]:
        """Rows as dicts over `columns`; absent fields are None."""
        columns = self.columns
        return [{name: row.fields.get(name) for name in columns} for row in self.rows]

    def to_dataframe(self):
        """
        Build a pandas DataFrame, one row per input CSID.

        Rows for missing inputs are all-NaN so the frame length always
        equals the number of inputs.
        """
        import pandas as pd

        return pd.DataFrame(self.records(), columns=self.columns, index=range(len(self.rows)))
