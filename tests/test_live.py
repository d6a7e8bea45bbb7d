"""Runs against solana-test-validator, skipped when it is not installed."""
import pytest
from solders.keypair import Keypair

from lifecycle.state import Stage
from lifecycle.transitions import advance, create
from stake.actions import get_stake_activation
from stake.delegators import scan_delegators
from stake.state import StakeActivationState
from system.actions import airdrop, get_balance
from vote.actions import get_validators


@pytest.mark.asyncio
async def test_airdrop(live_config):
    wallet = Keypair()
    airdrop_lamports = 1_000_000
    await airdrop(live_config, wallet.pubkey(), airdrop_lamports)
    assert await get_balance(live_config, wallet.pubkey()) == airdrop_lamports


@pytest.mark.asyncio
async def test_create_is_inactive(live_config):
    state = await create(live_config)
    status = await get_stake_activation(live_config, state.stake_account.pubkey())
    assert status == StakeActivationState.INACTIVE


@pytest.mark.asyncio
async def test_full_lifecycle(live_config):
    (total, current) = await get_validators(live_config)
    assert total >= current >= 1

    state = await advance(live_config, Stage.WITHDRAWN)
    assert state.stage == Stage.WITHDRAWN
    assert await get_balance(live_config, state.stake_account.pubkey()) == 0

    # the bootstrap stake stays delegated to the test validator
    scan = await scan_delegators(live_config, state.validator)
    assert scan.count >= 1
    assert scan.sample.stake.delegation.voter_pubkey == state.validator


@pytest.mark.asyncio
async def test_scan_unknown_validator(live_config):
    scan = await scan_delegators(live_config, Keypair().pubkey())
    assert scan.count == 0
    assert scan.sample is None
