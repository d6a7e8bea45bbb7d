import argparse

from cluster.config import ClusterConfig
from flows.runner import parser, run_flow
from lifecycle.state import Stage
from lifecycle.transitions import advance


async def flow(config: ClusterConfig, args: argparse.Namespace):
    return await advance(config, Stage.DELEGATED)


def main(argv=None):
    run_flow(flow, parser('Create a stake account and delegate it to the first active validator.'), argv)


if __name__ == "__main__":
    main()
