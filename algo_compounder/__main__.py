"""Command line entry point: python -m algo_compounder {recommend,status,run}"""

import argparse
import asyncio
import getpass
import json
import logging
import sys

from prometheus_client import start_http_server

from algo_compounder.config import settings
from algo_compounder.domain.exceptions import DomainException
from algo_compounder.domain.interest import recommend_wait_time
from algo_compounder.infrastructure.clients.algod import AlgodClient, log_node_status
from algo_compounder.infrastructure.observability.logging import setup_logging
from algo_compounder.infrastructure.wallet import AccountSigner
from algo_compounder.services.compounder import Compounder


def recommend(args: argparse.Namespace) -> int:
    recommendation = recommend_wait_time(
        settings.compound_coefs(args.balance),
        settings.default_wait_seconds,
    )
    print(
        json.dumps(
            {
                "wait_seconds": recommendation.wait_seconds,
                "wait_days": recommendation.wait_days,
                "found": recommendation.found,
                "optimal_collections_per_year": recommendation.optimal_collections_per_year,
            }
        )
    )
    return 0


def status(args: argparse.Namespace) -> int:
    asyncio.run(log_node_status(AlgodClient.from_settings()))
    return 0


def run(args: argparse.Namespace) -> int:
    if settings.account_mnemonic is not None:
        words = settings.account_mnemonic.get_secret_value()
    else:
        words = getpass.getpass("input the 25 word mnemonic for your account: ")

    client = AlgodClient.from_settings()
    signer = AccountSigner.from_mnemonic(words)
    if settings.metrics_port:
        start_http_server(settings.metrics_port)

    async def main() -> None:
        await log_node_status(client)
        await Compounder(client, signer).run(max_cycles=args.max_cycles)

    asyncio.run(main())
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="algo_compounder", description=__doc__)
    commands = parser.add_subparsers(dest="command", required=True)

    recommend_parser = commands.add_parser("recommend", help="print the recommended wait for a balance")
    recommend_parser.add_argument("--balance", type=float, required=True, help="account balance in Algos")
    recommend_parser.set_defaults(handler=recommend)

    status_parser = commands.add_parser("status", help="log the algod node status")
    status_parser.set_defaults(handler=status)

    run_parser = commands.add_parser("run", help="collect rewards at the recommended rate")
    run_parser.add_argument("--max-cycles", type=int, default=None, help="stop after this many cycles")
    run_parser.set_defaults(handler=run)

    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    setup_logging(settings.log_level)
    try:
        return args.handler(args)
    except DomainException as e:
        logging.error(f"{type(e).__name__}: {e}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
