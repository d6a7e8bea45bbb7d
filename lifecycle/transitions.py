"""Stake lifecycle transitions.

Each transition takes the state produced by the previous one, submits a single
transaction, waits for its confirmation and returns the extended state. A
failure anywhere propagates and leaves the lifecycle where it was.
"""

from typing import Optional

from solders.keypair import Keypair

from cluster.config import ClusterConfig
from lifecycle.selection import ValidatorSelector, first_current
from lifecycle.state import LifecycleState, Stage
from stake.actions import create_stake, deactivate_stake, delegate_stake, get_stake_activation, withdraw_stake
from stake.constants import AIRDROP_LAMPORTS
from system.actions import airdrop, get_balance
from vote.actions import get_vote_accounts


async def create(config: ClusterConfig, state: Optional[LifecycleState] = None) -> LifecycleState:
    state = state or LifecycleState()
    state.expect(Stage.UNINITIALIZED)
    wallet = Keypair()
    await airdrop(config, wallet.pubkey(), AIRDROP_LAMPORTS)

    stake_account = Keypair()
    signature = await create_stake(config, wallet, stake_account)
    print(f"Stake account created. Tx Id: {signature}")
    await get_balance(config, stake_account.pubkey())
    await get_stake_activation(config, stake_account.pubkey())
    return state._replace(stage=Stage.CREATED, wallet=wallet, stake_account=stake_account)


async def delegate(
    config: ClusterConfig, state: LifecycleState, select: ValidatorSelector = first_current
) -> LifecycleState:
    state.expect(Stage.CREATED)
    vote_accounts = await get_vote_accounts(config)
    validator = select(vote_accounts.current)

    stake = state.stake_account.pubkey()
    signature = await delegate_stake(config, state.wallet, stake, validator)
    print(f"Stake account delegated to: {validator}. Tx Id: {signature}")
    await get_stake_activation(config, stake)
    return state._replace(stage=Stage.DELEGATED, validator=validator)


async def deactivate(config: ClusterConfig, state: LifecycleState) -> LifecycleState:
    state.expect(Stage.DELEGATED)
    stake = state.stake_account.pubkey()
    signature = await deactivate_stake(config, state.wallet, stake)
    print(f"Stake account deactivated. Tx Id: {signature}")
    await get_stake_activation(config, stake)
    return state._replace(stage=Stage.DEACTIVATED)


async def withdraw(config: ClusterConfig, state: LifecycleState) -> LifecycleState:
    state.expect(Stage.DEACTIVATED)
    stake = state.stake_account.pubkey()
    signature = await withdraw_stake(config, state.wallet, stake, state.wallet.pubkey())
    print(f"Stake account balance withdrawn. Tx Id: {signature}")
    await get_balance(config, stake)
    return state._replace(stage=Stage.WITHDRAWN)


async def advance(
    config: ClusterConfig,
    target: Stage,
    state: Optional[LifecycleState] = None,
    select: ValidatorSelector = first_current,
) -> LifecycleState:
    """Runs every transition between `state` and `target`, in order."""
    state = state or LifecycleState()
    while state.stage < target:
        if state.stage == Stage.UNINITIALIZED:
            state = await create(config, state)
        elif state.stage == Stage.CREATED:
            state = await delegate(config, state, select)
        elif state.stage == Stage.DELEGATED:
            state = await deactivate(config, state)
        elif state.stage == Stage.DEACTIVATED:
            state = await withdraw(config, state)
    return state
