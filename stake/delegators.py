"""Stake accounts delegated to a vote account."""

import json
from typing import NamedTuple, Optional

from solders.pubkey import Pubkey
from solana.rpc.types import MemcmpOpts

from cluster.config import ClusterConfig
from stake.constants import STAKE_LEN, STAKE_PROGRAM_ID, VOTER_PUBKEY_OFFSET
from stake.state import StakeStake, check_layout


class Delegator(NamedTuple):
    """A stake account and its decoded state."""
    address: Pubkey
    lamports: int
    stake: StakeStake

    def to_json(self) -> str:
        delegation = self.stake.delegation
        return json.dumps({
            'address': str(self.address),
            'lamports': self.lamports,
            'state_type': self.stake.state_type.name,
            'rent_exempt_reserve': self.stake.rent_exempt_reserve,
            'staker': str(self.stake.authorized.staker),
            'withdrawer': str(self.stake.authorized.withdrawer),
            'voter': str(delegation.voter_pubkey) if delegation else None,
            'stake': delegation.stake if delegation else None,
            'activation_epoch': delegation.activation_epoch if delegation else None,
            'deactivation_epoch': delegation.deactivation_epoch if delegation else None,
        }, indent=2)


class DelegatorScan(NamedTuple):
    count: int
    sample: Optional[Delegator]


def is_delegated_to(data: bytes, vote: Pubkey) -> bool:
    """True for a stake account of the known size whose delegation names `vote`."""
    if len(data) != STAKE_LEN:
        return False
    return data[VOTER_PUBKEY_OFFSET:VOTER_PUBKEY_OFFSET + len(bytes(vote))] == bytes(vote)


async def scan_delegators(config: ClusterConfig, vote: Pubkey) -> DelegatorScan:
    check_layout()
    resp = await config.client.get_program_accounts(
        STAKE_PROGRAM_ID,
        commitment=config.commitment,
        encoding="base64",
        filters=[STAKE_LEN, MemcmpOpts(offset=VOTER_PUBKEY_OFFSET, bytes=str(vote))],
    )
    # decoding every match surfaces an unknown layout version
    delegators = [
        Delegator(
            address=keyed.pubkey,
            lamports=keyed.account.lamports,
            stake=StakeStake.decode(bytes(keyed.account.data)),
        )
        for keyed in resp.value
        if is_delegated_to(bytes(keyed.account.data), vote)
    ]

    print(f"Total number of delegators found for {vote} is {len(delegators)}")
    if not delegators:
        return DelegatorScan(count=0, sample=None)

    sample = delegators[0]
    print(f"Sample delegator: {sample.to_json()}")
    return DelegatorScan(count=len(delegators), sample=sample)
