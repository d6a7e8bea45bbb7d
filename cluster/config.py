import asyncio
from typing import NamedTuple

from solana.rpc.async_api import AsyncClient
from solana.rpc.commitment import Commitment, Processed


DEFAULT_ENDPOINT: str = "https://api.devnet.solana.com"
DEFAULT_COMMITMENT: Commitment = Processed
CONNECT_ATTEMPTS: int = 10


class ClusterConfig(NamedTuple):
    """RPC client and the commitment every read and confirmation is made at."""
    client: AsyncClient
    commitment: Commitment = DEFAULT_COMMITMENT


async def connect(endpoint: str = DEFAULT_ENDPOINT, commitment: Commitment = DEFAULT_COMMITMENT) -> ClusterConfig:
    print(f'Connecting to network at {endpoint}')
    async_client = AsyncClient(endpoint=endpoint, commitment=commitment)
    current_attempt = 0
    while not await async_client.is_connected():
        if current_attempt == CONNECT_ATTEMPTS:
            await async_client.close()
            raise Exception(f"Could not connect to {endpoint}")
        else:
            current_attempt += 1
        await asyncio.sleep(1)
    return ClusterConfig(client=async_client, commitment=commitment)
