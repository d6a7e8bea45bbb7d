import argparse

from cluster.config import ClusterConfig
from flows.runner import parser, run_flow
from lifecycle.state import Stage
from lifecycle.transitions import advance
from stake.delegators import scan_delegators
from vote.actions import get_validators


async def flow(config: ClusterConfig, args: argparse.Namespace):
    await get_validators(config)
    state = await advance(config, Stage.WITHDRAWN)
    return await scan_delegators(config, state.validator)


def main(argv=None):
    run_flow(flow, parser('List validators, run a full stake lifecycle and scan the chosen validator.'), argv)


if __name__ == "__main__":
    main()
