import pytest
from solders.keypair import Keypair

from stake.actions import get_stake_activation, stake_amount
from stake.constants import LAMPORTS_PER_SOL, USER_STAKE_LAMPORTS, U64_MAX
from stake.state import StakeActivationState, StakeStakeType


def test_stake_amount_adds_rent_exemption():
    assert USER_STAKE_LAMPORTS == LAMPORTS_PER_SOL // 2
    assert stake_amount(2_282_880) == 2_282_880 + 500_000_000
    assert stake_amount(0) == USER_STAKE_LAMPORTS


@pytest.mark.asyncio
async def test_stake_activation_of_missing_account(config):
    assert await get_stake_activation(config, Keypair().pubkey()) == StakeActivationState.INACTIVE


@pytest.mark.asyncio
async def test_stake_activation_from_account(config, fake_client, validators, stake_encoder):
    stake = Keypair().pubkey()
    data = stake_encoder(StakeStakeType.STAKE, Keypair().pubkey(), validators[0], fake_client.epoch, U64_MAX)
    fake_client.accounts[stake] = type("Account", (), {"data": data})

    assert await get_stake_activation(config, stake) == StakeActivationState.ACTIVATING

    fake_client.epoch += 1
    assert await get_stake_activation(config, stake) == StakeActivationState.ACTIVE
