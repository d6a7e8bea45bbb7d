import argparse

from solders.pubkey import Pubkey

from cluster.config import ClusterConfig
from flows.runner import parser, run_flow
from lifecycle.selection import first_current
from stake.delegators import scan_delegators
from vote.actions import get_vote_accounts


async def flow(config: ClusterConfig, args: argparse.Namespace):
    if args.vote_account:
        vote = Pubkey.from_string(args.vote_account)
    else:
        vote = first_current((await get_vote_accounts(config)).current)
    return await scan_delegators(config, vote)


def main(argv=None):
    args_parser = parser('Count the stake accounts delegated to a validator and print one of them.')
    args_parser.add_argument('vote_account', metavar='VOTE_ACCOUNT', type=str, nargs='?',
                             help='Vote account of the validator, given by a public key in base-58, \
                             defaults to the first active validator')
    run_flow(flow, args_parser, argv)


if __name__ == "__main__":
    main()
