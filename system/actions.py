from solders.pubkey import Pubkey
from solders.signature import Signature

from cluster.config import ClusterConfig
from cluster.transaction import confirm
from stake.constants import LAMPORTS_PER_SOL


async def airdrop(config: ClusterConfig, receiver: Pubkey, lamports: int) -> Signature:
    print(f"Airdropping {lamports} lamports to {receiver}...")
    resp = await config.client.request_airdrop(receiver, lamports, commitment=config.commitment)
    latest = (await config.client.get_latest_blockhash(config.commitment)).value
    await confirm(config, resp.value, latest.last_valid_block_height)
    return resp.value


async def get_balance(config: ClusterConfig, account: Pubkey) -> int:
    resp = await config.client.get_balance(account, commitment=config.commitment)
    print(f"Account balance: {resp.value / LAMPORTS_PER_SOL} SOL")
    return resp.value
