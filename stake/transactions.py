"""Unsigned stake transactions for each step of a stake account's life."""

from typing import List, NamedTuple, Optional

from solders.instruction import Instruction
from solders.message import Message
from solders.pubkey import Pubkey
from solders.sysvar import CLOCK, STAKE_HISTORY
import solders.system_program as sys

from stake.constants import STAKE_LEN, STAKE_PROGRAM_ID, SYSVAR_STAKE_CONFIG_ID
from stake.state import Authorized, Lockup
import stake.instructions as st


class StakeTransaction(NamedTuple):
    """Instructions waiting for a blockhash and signatures."""
    fee_payer: Pubkey
    instructions: List[Instruction]

    def message(self) -> Message:
        return Message(self.instructions, self.fee_payer)


def build_create(payer: Pubkey, stake: Pubkey, lamports: int, lockup: Optional[Lockup] = None) -> StakeTransaction:
    """Allocates and initializes a stake account with `payer` as staker and withdrawer.

    `lamports` must cover the rent exemption for `STAKE_LEN` bytes, otherwise the
    transaction is rejected by the cluster.
    """
    if lockup is None:
        lockup = Lockup.unrestricted(payer)
    return StakeTransaction(
        fee_payer=payer,
        instructions=[
            sys.create_account(
                sys.CreateAccountParams(
                    from_pubkey=payer,
                    to_pubkey=stake,
                    lamports=lamports,
                    space=STAKE_LEN,
                    owner=STAKE_PROGRAM_ID,
                )
            ),
            st.initialize(
                st.InitializeParams(
                    stake=stake,
                    authorized=Authorized(
                        staker=payer,
                        withdrawer=payer,
                    ),
                    lockup=lockup,
                )
            ),
        ],
    )


def build_delegate(stake: Pubkey, authority: Pubkey, vote: Pubkey) -> StakeTransaction:
    return StakeTransaction(
        fee_payer=authority,
        instructions=[
            st.delegate_stake(
                st.DelegateStakeParams(
                    stake=stake,
                    vote=vote,
                    clock_sysvar=CLOCK,
                    stake_history_sysvar=STAKE_HISTORY,
                    stake_config_id=SYSVAR_STAKE_CONFIG_ID,
                    staker=authority,
                )
            ),
        ],
    )


def build_deactivate(stake: Pubkey, authority: Pubkey) -> StakeTransaction:
    """Starts the cooldown of a delegated stake. The balance stays in place."""
    return StakeTransaction(
        fee_payer=authority,
        instructions=[
            st.deactivate(
                st.DeactivateParams(
                    stake=stake,
                    clock_sysvar=CLOCK,
                    staker=authority,
                )
            ),
        ],
    )


def build_withdraw(stake: Pubkey, authority: Pubkey, destination: Pubkey, lamports: int) -> StakeTransaction:
    return StakeTransaction(
        fee_payer=authority,
        instructions=[
            st.withdraw(
                st.WithdrawParams(
                    stake=stake,
                    to=destination,
                    clock_sysvar=CLOCK,
                    stake_history_sysvar=STAKE_HISTORY,
                    withdrawer=authority,
                    lamports=lamports,
                )
            ),
        ],
    )
