import argparse
import asyncio
import sys
from typing import Awaitable, Callable, List, Optional

from cluster.config import ClusterConfig, DEFAULT_ENDPOINT, connect


Flow = Callable[[ClusterConfig, argparse.Namespace], Awaitable[object]]


def parser(description: str) -> argparse.ArgumentParser:
    args_parser = argparse.ArgumentParser(description=description)
    args_parser.add_argument('--endpoint', metavar='ENDPOINT_URL', type=str,
                             default=DEFAULT_ENDPOINT,
                             help='RPC endpoint to use, e.g. https://api.devnet.solana.com')
    return args_parser


async def run(flow: Flow, args: argparse.Namespace):
    config = await connect(args.endpoint)
    try:
        return await flow(config, args)
    finally:
        await config.client.close()


def run_flow(flow: Flow, args_parser: argparse.ArgumentParser, argv: Optional[List[str]] = None):
    """Runs `flow` against a fresh connection, exiting with status 1 on any error."""
    args = args_parser.parse_args(argv)
    try:
        return asyncio.run(run(flow, args))
    except Exception as err:
        print(f"Error Encountered: {err!r}", file=sys.stderr)
        sys.exit(1)
