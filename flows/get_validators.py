import argparse

from cluster.config import ClusterConfig
from flows.runner import parser, run_flow
from vote.actions import get_validators


async def flow(config: ClusterConfig, args: argparse.Namespace):
    return await get_validators(config)


def main(argv=None):
    run_flow(flow, parser('Print the number of validators and active validators.'), argv)


if __name__ == "__main__":
    main()
