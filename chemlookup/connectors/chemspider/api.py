"""
Synchronous helpers for scripts and notebooks.

Each helper opens a connector, runs the whole batch and returns plain
values: a list with None for every input that could not be resolved, or a
pandas DataFrame for extended information.

    token = "37bf5e57-9091-42f5-9274-650a64398aaf"
    casnr = ["107-06-2", "107-13-1", "319-86-8", "1031-07-8"]
    csid = get_csid(casnr, token=token)
    smiles = csid_to_smiles(csid, token=token)
    info = csid_to_ext(csid, token=token)
"""

import asyncio
from typing import Iterable

from chemlookup.connectors.chemspider.connector import ChemSpiderConnector, CsidInput
from chemlookup.connectors.chemspider.resolution import console_prompt
from chemlookup.connectors.chemspider.schemas import ResolutionPolicy


def get_csid(
    query: str | int | Iterable[str | int | None],
    token: str | None = None,
    verbose: bool = False,
    ask: bool = False,
) -> list[str | None]:
    """
    Return the ChemSpider ID for each search query (e.g. CAS numbers).

    With ``ask=True`` the user picks among multiple hits on the console;
    otherwise multiple hits give None.
    """

    async def run() -> list[str | None]:
        async with ChemSpiderConnector(token=token) as connector:
            if ask:
                results = await connector.get_csid(
                    query,
                    policy=ResolutionPolicy.CALLBACK,
                    chooser=console_prompt,
                    verbose=verbose,
                )
            else:
                results = await connector.get_csid(
                    query, policy=ResolutionPolicy.FAIL, verbose=verbose
                )
            return [r.value for r in results]

    return asyncio.run(run())


def csid_to_smiles(
    csid: CsidInput | Iterable[CsidInput],
    token: str | None = None,
    verbose: bool = False,
) -> list[str | None]:
    """Convert CSIDs to SMILES; None inputs stay None without a request."""

    async def run() -> list[str | None]:
        async with ChemSpiderConnector(token=token) as connector:
            results = await connector.csid_to_smiles(csid, verbose=verbose)
            return [r.value for r in results]

    return asyncio.run(run())


def csid_to_ext(
    csid: CsidInput | Iterable[CsidInput],
    token: str | None = None,
    verbose: bool = False,
):
    """Get extended compound information as a pandas DataFrame, one row per CSID."""

    async def run():
        async with ChemSpiderConnector(token=token) as connector:
            table = await connector.csid_to_ext(csid, verbose=verbose)
            return table.to_dataframe()

    return asyncio.run(run())
