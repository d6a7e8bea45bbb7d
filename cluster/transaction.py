from typing import Optional

from solders.keypair import Keypair
from solders.signature import Signature
from solders.transaction import Transaction
from solana.rpc.types import TxOpts

from cluster.config import ClusterConfig
from stake.transactions import StakeTransaction


class TransactionFailedError(Exception):
    """A transaction was confirmed with an error status."""

    def __init__(self, signature: Signature, err):
        super().__init__(f"Transaction {signature} failed: {err}")
        self.signature = signature
        self.err = err


async def confirm(config: ClusterConfig, signature: Signature, last_valid_block_height: Optional[int]):
    """Blocks until `signature` reaches the configured commitment or its blockhash expires."""
    resp = await config.client.confirm_transaction(
        signature, config.commitment, last_valid_block_height=last_valid_block_height)
    status = resp.value[0] if resp.value else None
    if status is not None and status.err is not None:
        raise TransactionFailedError(signature, status.err)


async def send_and_confirm(config: ClusterConfig, txn: StakeTransaction, *signers: Keypair) -> Signature:
    latest = (await config.client.get_latest_blockhash(config.commitment)).value
    signed = Transaction(list(signers), txn.message(), latest.blockhash)
    opts = TxOpts(skip_confirmation=True, preflight_commitment=config.commitment)
    signature = (await config.client.send_raw_transaction(bytes(signed), opts=opts)).value
    await confirm(config, signature, latest.last_valid_block_height)
    return signature
