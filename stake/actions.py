from solders.pubkey import Pubkey
from solders.keypair import Keypair
from solders.signature import Signature

from cluster.config import ClusterConfig
from cluster.transaction import send_and_confirm
from stake.constants import STAKE_LEN, USER_STAKE_LAMPORTS
from stake.state import StakeActivationState, StakeStake, activation_state
from stake.transactions import build_create, build_deactivate, build_delegate, build_withdraw


def stake_amount(rent_exemption: int) -> int:
    """Lamports to fund a new stake account with."""
    return rent_exemption + USER_STAKE_LAMPORTS


async def create_stake(config: ClusterConfig, payer: Keypair, stake: Keypair) -> Signature:
    print(f"Creating stake {stake.pubkey()}")
    resp = await config.client.get_minimum_balance_for_rent_exemption(STAKE_LEN, commitment=config.commitment)
    txn = build_create(payer.pubkey(), stake.pubkey(), stake_amount(resp.value))
    return await send_and_confirm(config, txn, payer, stake)


async def delegate_stake(config: ClusterConfig, staker: Keypair, stake: Pubkey, vote: Pubkey) -> Signature:
    txn = build_delegate(stake, staker.pubkey(), vote)
    return await send_and_confirm(config, txn, staker)


async def deactivate_stake(config: ClusterConfig, staker: Keypair, stake: Pubkey) -> Signature:
    txn = build_deactivate(stake, staker.pubkey())
    return await send_and_confirm(config, txn, staker)


async def withdraw_stake(config: ClusterConfig, withdrawer: Keypair, stake: Pubkey, to: Pubkey) -> Signature:
    """Withdraws the whole balance the stake account holds right now."""
    resp = await config.client.get_balance(stake, commitment=config.commitment)
    txn = build_withdraw(stake, withdrawer.pubkey(), to, resp.value)
    return await send_and_confirm(config, txn, withdrawer)


async def get_stake_activation(config: ClusterConfig, stake: Pubkey) -> StakeActivationState:
    resp = await config.client.get_account_info(stake, commitment=config.commitment)
    decoded = StakeStake.decode(resp.value.data) if resp.value else None
    epoch = (await config.client.get_epoch_info(commitment=config.commitment)).value.epoch
    state = activation_state(decoded, epoch)
    print(f"Stake account status: {state.value}.")
    return state
