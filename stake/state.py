"""Stake State."""

from enum import Enum, IntEnum
from typing import NamedTuple, Dict, Optional
from construct import Bytes, Container, Struct, Float64l, Int32ul, Int64sl, Int64ul  # type: ignore

from solders.pubkey import Pubkey

from stake.constants import STAKE_LAYOUT_VERSION, STAKE_LEN, U64_MAX, VOTER_PUBKEY_OFFSET

PUBLIC_KEY_LAYOUT = Bytes(32)


class StakeLayoutError(Exception):
    """Stake account data does not match the known layout version."""


class Lockup(NamedTuple):
    """Lockup for a stake account."""
    unix_timestamp: int
    epoch: int
    custodian: Pubkey

    @classmethod
    def decode_container(cls, container: Container):
        return Lockup(
            unix_timestamp=container['unix_timestamp'],
            epoch=container['epoch'],
            custodian=Pubkey(container['custodian']),
        )

    @classmethod
    def unrestricted(cls, custodian: Pubkey):
        """Lockup with no time or epoch restriction."""
        return Lockup(unix_timestamp=0, epoch=0, custodian=custodian)

    def as_bytes_dict(self) -> Dict:
        self_dict = self._asdict()
        self_dict['custodian'] = bytes(self_dict['custodian'])
        return self_dict


class Authorized(NamedTuple):
    """Define who is authorized to change a stake."""
    staker: Pubkey
    withdrawer: Pubkey

    @classmethod
    def decode_container(cls, container: Container):
        return Authorized(
            staker=Pubkey(container['staker']),
            withdrawer=Pubkey(container['withdrawer']),
        )

    def as_bytes_dict(self) -> Dict:
        return {
            'staker': bytes(self.staker),
            'withdrawer': bytes(self.withdrawer),
        }


class StakeStakeType(IntEnum):
    """Stake State Types."""
    UNINITIALIZED = 0
    INITIALIZED = 1
    STAKE = 2
    REWARDS_POOL = 3


class StakeActivationState(str, Enum):
    """Activation status of a stake account, as reported to users."""
    INACTIVE = 'inactive'
    ACTIVATING = 'activating'
    ACTIVE = 'active'
    DEACTIVATING = 'deactivating'
    DEACTIVATED = 'deactivated'


class Delegation(NamedTuple):
    voter_pubkey: Pubkey
    stake: int
    activation_epoch: int
    deactivation_epoch: int

    @classmethod
    def decode_container(cls, container: Container):
        return Delegation(
            voter_pubkey=Pubkey(container['voter_pubkey']),
            stake=container['stake'],
            activation_epoch=container['activation_epoch'],
            deactivation_epoch=container['deactivation_epoch'],
        )


class StakeStake(NamedTuple):
    """Stake state."""
    state_type: StakeStakeType
    rent_exempt_reserve: int
    authorized: Authorized
    lockup: Lockup
    delegation: Optional[Delegation]

    @classmethod
    def decode(cls, data: bytes):
        if len(data) != STAKE_LEN:
            raise StakeLayoutError(f"Stake account is {len(data)} bytes, expected {STAKE_LEN}")
        parsed = STAKE_STATE_LAYOUT.parse(data)
        try:
            state_type = StakeStakeType(parsed['state_type'])
        except ValueError:
            raise StakeLayoutError(
                f"Unknown stake state {parsed['state_type']}, layout version {STAKE_LAYOUT_VERSION} expected"
            ) from None
        meta = parsed['state']['meta']
        delegation = None
        if state_type == StakeStakeType.STAKE:
            delegation = Delegation.decode_container(parsed['state']['stake']['delegation'])
        return StakeStake(
            state_type=state_type,
            rent_exempt_reserve=meta['rent_exempt_reserve'],
            authorized=Authorized.decode_container(meta['authorized']),
            lockup=Lockup.decode_container(meta['lockup']),
            delegation=delegation,
        )


def activation_state(stake: Optional[StakeStake], epoch: int) -> StakeActivationState:
    """Activation status of a stake at the given epoch, ignoring warmup and cooldown rates."""
    if stake is None or stake.delegation is None:
        return StakeActivationState.INACTIVE
    delegation = stake.delegation
    if delegation.deactivation_epoch != U64_MAX:
        if delegation.activation_epoch == delegation.deactivation_epoch:
            return StakeActivationState.INACTIVE
        if epoch <= delegation.deactivation_epoch:
            return StakeActivationState.DEACTIVATING
        return StakeActivationState.DEACTIVATED
    # bootstrap stakes are activated at U64_MAX
    if delegation.activation_epoch != U64_MAX and epoch <= delegation.activation_epoch:
        return StakeActivationState.ACTIVATING
    return StakeActivationState.ACTIVE


LOCKUP_LAYOUT = Struct(
    "unix_timestamp" / Int64sl,
    "epoch" / Int64ul,
    "custodian" / PUBLIC_KEY_LAYOUT,
)


AUTHORIZED_LAYOUT = Struct(
    "staker" / PUBLIC_KEY_LAYOUT,
    "withdrawer" / PUBLIC_KEY_LAYOUT,
)

META_LAYOUT = Struct(
    "rent_exempt_reserve" / Int64ul,
    "authorized" / AUTHORIZED_LAYOUT,
    "lockup" / LOCKUP_LAYOUT,
)

DELEGATION_LAYOUT = Struct(
    "voter_pubkey" / PUBLIC_KEY_LAYOUT,
    "stake" / Int64ul,
    "activation_epoch" / Int64ul,
    "deactivation_epoch" / Int64ul,
    "warmup_cooldown_rate" / Float64l,
)

STAKE_LAYOUT = Struct(
    "delegation" / DELEGATION_LAYOUT,
    "credits_observed" / Int64ul,
)

STAKE_AND_META_LAYOUT = Struct(
    "meta" / META_LAYOUT,
    "stake" / STAKE_LAYOUT,
)

STAKE_STATE_LAYOUT = Struct(
    "state_type" / Int32ul,
    "state" / STAKE_AND_META_LAYOUT,
    "stake_flags" / Bytes(STAKE_LEN - Int32ul.sizeof() - STAKE_AND_META_LAYOUT.sizeof()),
)


def check_layout():
    """Raises if the layout above no longer agrees with the named stake account offsets."""
    voter_offset = Int32ul.sizeof() + META_LAYOUT.sizeof()
    if voter_offset != VOTER_PUBKEY_OFFSET:
        raise StakeLayoutError(f"Voter pubkey at offset {voter_offset}, expected {VOTER_PUBKEY_OFFSET}")
    if STAKE_STATE_LAYOUT.sizeof() != STAKE_LEN:
        raise StakeLayoutError(f"Stake layout is {STAKE_STATE_LAYOUT.sizeof()} bytes, expected {STAKE_LEN}")
