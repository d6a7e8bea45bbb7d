"""Stake Program Constants."""

from solders.pubkey import Pubkey

STAKE_PROGRAM_ID = Pubkey.from_string("Stake11111111111111111111111111111111111111")
"""Public key that identifies the Stake program."""

SYSVAR_STAKE_CONFIG_ID = Pubkey.from_string("StakeConfig11111111111111111111111111111111")
"""Public key that identifies the Stake config sysvar."""

STAKE_LAYOUT_VERSION: int = 1
"""Version of the stake account layout the offsets below describe."""

STAKE_LEN: int = 200
"""Size of stake account."""

VOTER_PUBKEY_OFFSET: int = 124
"""Byte offset of the delegated vote account inside a stake account."""

LAMPORTS_PER_SOL: int = 1_000_000_000
"""Number of lamports per SOL"""

USER_STAKE_LAMPORTS: int = LAMPORTS_PER_SOL // 2
"""Lamports staked on top of the rent exemption when creating a stake account."""

AIRDROP_LAMPORTS: int = LAMPORTS_PER_SOL
"""Lamports requested from the faucet to fund a new wallet."""

U64_MAX: int = 2**64 - 1
"""Epoch sentinel used by the stake program for "never"."""
