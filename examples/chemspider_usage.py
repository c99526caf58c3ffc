"""
ChemSpider Connector Usage Examples.

Demonstrates how to resolve CAS numbers to CSIDs, SMILES and extended
compound information. Requires CHEMSPIDER_TOKEN in the environment.
"""

import asyncio
import logging
import sys

from chemlookup.connectors.chemspider import (
    ChemSpiderClient,
    ChemSpiderConnector,
    ResolutionPolicy,
    console_prompt,
)

CAS_NUMBERS = ["107-06-2", "107-13-1", "319-86-8", "1031-07-8"]


async def example_get_csid():
    """Resolve CAS numbers to CSIDs, failing on multiple hits."""
    async with ChemSpiderConnector(policy=ResolutionPolicy.FAIL) as connector:
        results = await connector.get_csid(CAS_NUMBERS)

        for r in results:
            print(f"{r.query}: {r.value} ({r.status.value}, {len(r.candidates)} hits)")


async def example_interactive_search():
    """Let the user pick among multiple hits on the console."""
    async with ChemSpiderConnector() as connector:
        results = await connector.get_csid(
            ["benzene"],
            chooser=console_prompt,
        )
        print(f"Chosen CSID: {results[0].value}")


async def example_smiles_chain():
    """Feed search results straight into the SMILES lookup."""
    async with ChemSpiderConnector(policy=ResolutionPolicy.FIRST_MATCH) as connector:
        csids = await connector.get_csid(CAS_NUMBERS)
        smiles = await connector.csid_to_smiles(csids, verbose=True)

        for query, s in zip(CAS_NUMBERS, smiles):
            print(f"{query}: {s.value or 'N/A'}")


async def example_extended_info():
    """Collect extended compound information into a DataFrame."""
    async with ChemSpiderConnector(policy=ResolutionPolicy.FIRST_MATCH) as connector:
        csids = await connector.get_csid(CAS_NUMBERS)
        table = await connector.csid_to_ext(csids)

        df = table.to_dataframe()
        print(df[["CSID", "MF", "CommonName"]] if len(table.columns) else df)


async def example_custom_client():
    """Use a slower request delay and a shared client."""
    client = ChemSpiderClient(request_delay=0.5, max_retries=2)
    connector = ChemSpiderConnector(client=client)

    try:
        smiles = await connector.csid_to_smiles(["2157", None, "6104"])
        print([s.value for s in smiles])
    finally:
        await client.close()


async def main():
    """Run all examples."""
    print("=" * 60)
    print("CAS -> CSID")
    print("=" * 60)
    await example_get_csid()

    print("\n" + "=" * 60)
    print("CAS -> CSID -> SMILES")
    print("=" * 60)
    await example_smiles_chain()

    print("\n" + "=" * 60)
    print("Extended info")
    print("=" * 60)
    await example_extended_info()

    print("\n" + "=" * 60)
    print("Custom client")
    print("=" * 60)
    await example_custom_client()

    if sys.stdin.isatty():
        print("\n" + "=" * 60)
        print("Interactive disambiguation")
        print("=" * 60)
        await example_interactive_search()


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    asyncio.run(main())
