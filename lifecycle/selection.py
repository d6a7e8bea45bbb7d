from typing import Callable, Sequence

from solders.pubkey import Pubkey
from solders.rpc.responses import RpcVoteAccountInfo


ValidatorSelector = Callable[[Sequence[RpcVoteAccountInfo]], Pubkey]
"""Picks the vote account to delegate to from the current validator set."""


def first_current(current: Sequence[RpcVoteAccountInfo]) -> Pubkey:
    """First active validator. Raises IndexError on an empty set."""
    return current[0].vote_pubkey
