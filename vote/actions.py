from typing import Tuple

from solders.rpc.responses import RpcVoteAccountStatus

from cluster.config import ClusterConfig


async def get_vote_accounts(config: ClusterConfig) -> RpcVoteAccountStatus:
    """Current (active) and delinquent vote accounts of the cluster."""
    resp = await config.client.get_vote_accounts(commitment=config.commitment)
    return resp.value


async def get_validators(config: ClusterConfig) -> Tuple[int, int]:
    vote_accounts = await get_vote_accounts(config)
    total = len(vote_accounts.current) + len(vote_accounts.delinquent)
    print(f"# of validators: {total}")
    print(f"# of current validators: {len(vote_accounts.current)}")
    return (total, len(vote_accounts.current))
