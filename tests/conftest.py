import asyncio
import pytest
import pytest_asyncio
import os
import shutil
import tempfile
from subprocess import Popen
from types import SimpleNamespace
from typing import AsyncIterator, List, Optional

from solders.hash import Hash
from solders.keypair import Keypair
from solders.pubkey import Pubkey
from solders.transaction import Transaction
from solana.rpc.commitment import Confirmed
from solana.rpc.core import TransactionExpiredBlockheightExceededError, UnconfirmedTxError

from cluster.config import ClusterConfig, connect
from stake.constants import U64_MAX
from stake.state import STAKE_STATE_LAYOUT

ENDPOINT: str = "http://127.0.0.1:8899"
SLOTS_PER_EPOCH: int = 8192
RENT_EXEMPTION: int = 2_282_880


def _resp(value):
    return SimpleNamespace(value=value)


class FakeClient:
    """In-memory stand-in for `AsyncClient` that records what was asked of it."""

    def __init__(self, validators: List[Pubkey], rent: int = RENT_EXEMPTION):
        self.validators = validators
        self.rent = rent
        self.balance = 0
        self.epoch = 10
        self.accounts = {}
        self.program_accounts = []
        self.fail_confirmation_at: Optional[int] = None
        self.status_err = None
        self.calls: List[str] = []
        self.sent: List[Transaction] = []
        self.confirmed = []
        self.block_height = 100
        self.issued_height: Optional[int] = None
        self.issued_blockhashes: List[Hash] = []
        self.airdrops = []
        self.confirmations = []
        self.program_account_filters = None

    async def is_connected(self):
        return True

    async def close(self):
        self.calls.append("close")

    async def get_vote_accounts(self, commitment=None):
        self.calls.append("get_vote_accounts")
        current = [SimpleNamespace(vote_pubkey=validator) for validator in self.validators]
        return _resp(SimpleNamespace(current=current, delinquent=[]))

    async def get_latest_blockhash(self, commitment=None):
        self.calls.append("get_latest_blockhash")
        self.block_height += 1
        self.issued_height = self.block_height + 150
        self.issued_blockhashes.append(Hash.new_unique())
        latest = SimpleNamespace(blockhash=self.issued_blockhashes[-1], last_valid_block_height=self.issued_height)
        return _resp(latest)

    async def get_minimum_balance_for_rent_exemption(self, usize, commitment=None):
        self.calls.append("get_minimum_balance_for_rent_exemption")
        return _resp(self.rent)

    async def request_airdrop(self, pubkey, lamports, commitment=None):
        self.calls.append("request_airdrop")
        self.airdrops.append((pubkey, lamports))
        return _resp(Keypair().sign_message(bytes(pubkey)))

    async def get_balance(self, pubkey, commitment=None):
        self.calls.append("get_balance")
        return _resp(self.balance)

    async def get_account_info(self, pubkey, commitment=None):
        self.calls.append("get_account_info")
        return _resp(self.accounts.get(pubkey))

    async def get_epoch_info(self, commitment=None):
        self.calls.append("get_epoch_info")
        return _resp(SimpleNamespace(epoch=self.epoch))

    async def send_raw_transaction(self, txn, opts=None):
        self.calls.append("send_raw_transaction")
        transaction = Transaction.from_bytes(txn)
        self.sent.append(transaction)
        return _resp(transaction.signatures[0])

    async def confirm_transaction(self, tx_sig, commitment=None, sleep_seconds=0.5, last_valid_block_height=None):
        self.calls.append("confirm_transaction")
        # (height asked for, height of the latest blockhash handed out)
        self.confirmations.append((last_valid_block_height, self.issued_height))
        if self.fail_confirmation_at == len(self.confirmed):
            if last_valid_block_height is None:
                raise UnconfirmedTxError(f"Unable to confirm transaction {tx_sig}")
            raise TransactionExpiredBlockheightExceededError(f"{tx_sig} has expired: block height exceeded")
        self.confirmed.append(tx_sig)
        return _resp([SimpleNamespace(err=self.status_err)])

    async def get_program_accounts(self, pubkey, commitment=None, encoding="base64", data_slice=None, filters=None):
        self.calls.append("get_program_accounts")
        self.program_account_filters = filters
        return _resp(self.program_accounts)


@pytest.fixture
def validators() -> List[Pubkey]:
    return [Keypair().pubkey() for _ in range(3)]


@pytest.fixture
def fake_client(validators) -> FakeClient:
    return FakeClient(validators)


@pytest.fixture
def config(fake_client) -> ClusterConfig:
    return ClusterConfig(client=fake_client, commitment=Confirmed)


@pytest.fixture(scope="session")
def solana_test_validator():
    if shutil.which("solana-test-validator") is None:
        pytest.skip("solana-test-validator not installed")
    old_cwd = os.getcwd()
    newpath = tempfile.mkdtemp()
    os.chdir(newpath)
    validator = Popen([
        "solana-test-validator",
        "--reset", "--quiet",
        "--slots-per-epoch", str(SLOTS_PER_EPOCH),
    ],)
    yield
    validator.kill()
    os.chdir(old_cwd)
    shutil.rmtree(newpath)


@pytest_asyncio.fixture
async def live_config(solana_test_validator) -> AsyncIterator[ClusterConfig]:
    config = await connect(ENDPOINT, Confirmed)
    total_attempts = 30
    current_attempt = 0
    while not (await config.client.get_vote_accounts(commitment=Confirmed)).value.current:
        if current_attempt == total_attempts:
            raise Exception("Test validator is not voting")
        else:
            current_attempt += 1
        await asyncio.sleep(1.0)
    yield config
    await config.client.close()


def encode_stake(
    state_type: int, authority: Pubkey, voter: Pubkey,
    activation_epoch: int = 0, deactivation_epoch: int = U64_MAX, stake: int = 500_000_000,
) -> bytes:
    return STAKE_STATE_LAYOUT.build(dict(
        state_type=state_type,
        state=dict(
            meta=dict(
                rent_exempt_reserve=RENT_EXEMPTION,
                authorized=dict(staker=bytes(authority), withdrawer=bytes(authority)),
                lockup=dict(unix_timestamp=0, epoch=0, custodian=bytes(authority)),
            ),
            stake=dict(
                delegation=dict(
                    voter_pubkey=bytes(voter),
                    stake=stake,
                    activation_epoch=activation_epoch,
                    deactivation_epoch=deactivation_epoch,
                    warmup_cooldown_rate=0.25,
                ),
                credits_observed=0,
            ),
        ),
        stake_flags=bytes(4),
    ))


@pytest.fixture
def stake_encoder():
    """Builds raw stake account data."""
    return encode_stake
