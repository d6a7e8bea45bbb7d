"""Lifecycle State."""

from enum import IntEnum
from typing import NamedTuple, Optional

from solders.keypair import Keypair
from solders.pubkey import Pubkey


class LifecycleError(Exception):
    """A lifecycle transition was requested from the wrong stage."""


class Stage(IntEnum):
    """Stages of a stake account, in the only order they can be reached."""
    UNINITIALIZED = 0
    CREATED = 1
    DELEGATED = 2
    DEACTIVATED = 3
    WITHDRAWN = 4


class LifecycleState(NamedTuple):
    """Everything one stage hands over to the next."""
    stage: Stage = Stage.UNINITIALIZED
    wallet: Optional[Keypair] = None
    """Fee payer, staker and withdrawer."""
    stake_account: Optional[Keypair] = None
    validator: Optional[Pubkey] = None
    """Vote account the stake is delegated to."""

    def expect(self, stage: Stage):
        if self.stage != stage:
            raise LifecycleError(f"Expected stake lifecycle at {stage.name}, found {self.stage.name}")
