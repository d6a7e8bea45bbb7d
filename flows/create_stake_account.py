import argparse

from cluster.config import ClusterConfig
from flows.runner import parser, run_flow
from lifecycle.state import Stage
from lifecycle.transitions import advance


async def flow(config: ClusterConfig, args: argparse.Namespace):
    return await advance(config, Stage.CREATED)


def main(argv=None):
    run_flow(flow, parser('Create and fund a new stake account.'), argv)


if __name__ == "__main__":
    main()
