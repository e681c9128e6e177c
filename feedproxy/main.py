#!/usr/bin/env python3
"""Feed Proxy inspector.

Builds a reader proxy graph from a JSON description and prints the legacy
aggregator view of its nodes.

See feedproxy/src/GraphConfig.py for the graph file format.
"""

import argparse
import logging
import os
import sys

from .src.errors import ProxyError
from .src.GraphConfig import GraphConfig, GraphConfigError
from .src.ReaderProxy import get_available_proxies

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S",
)
logger = logging.getLogger(__name__)


def parse_node_names(node_str: str | None) -> list[str]:
    """Parse a comma-separated list of node names.

    :param node_str: Comma-separated node names, or None.
    :returns: List of stripped, non-empty names.
    """
    if not node_str:
        return []
    return [name.strip() for name in node_str.split(",") if name.strip()]


def main() -> None:
    """Main entry point for the Feed Proxy inspector CLI."""
    available_kinds = get_available_proxies()

    parser = argparse.ArgumentParser(
        description="Feed Proxy: Inspect composed price feed proxies",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=f"""
Available proxy kinds:
  {', '.join(available_kinds)}

Examples:
  # Read every node of a graph
  python -m feedproxy.main --graph graphs/wsteth_usd.json

  # Read selected nodes against a specific RPC endpoint
  python -m feedproxy.main --graph graphs/wsteth_usd.json \\
      --node wsteth_usd,wsteth_usd_8 --rpc-url https://eth.example.org

Environment variables (CLI args take precedence):
  GRAPH, NODE, RPC_URL
""",
    )

    parser.add_argument(
        "--graph",
        type=str,
        help="Path to the JSON graph description",
        default=os.environ.get("GRAPH"),
    )

    parser.add_argument(
        "--node",
        type=str,
        help="Comma-separated node names to read (default: all nodes)",
        default=os.environ.get("NODE"),
    )

    parser.add_argument(
        "--rpc-url",
        dest="rpc_url",
        type=str,
        help="RPC endpoint for contract-backed nodes (overrides the graph's rpc_url)",
        default=os.environ.get("RPC_URL"),
    )

    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Enable verbose (DEBUG) logging",
    )

    args = parser.parse_args()

    # Configure logging level
    if args.verbose:
        logging.getLogger().setLevel(logging.DEBUG)

    if not args.graph:
        parser.error("--graph must be specified")

    try:
        graph = GraphConfig.load(args.graph)
    except (OSError, ValueError) as e:
        parser.error(f"Cannot load graph {args.graph}: {e}")

    if args.rpc_url:
        graph.rpc_url = args.rpc_url

    names = parse_node_names(args.node) or [node.name for node in graph.nodes]
    known = {node.name for node in graph.nodes}
    unknown = [name for name in names if name not in known]
    if unknown:
        parser.error(f"Unknown nodes: {unknown}. Available: {', '.join(sorted(known))}")

    try:
        directory, addresses = graph.build()
    except (GraphConfigError, ProxyError) as e:
        logger.error(f"Failed to build graph: {e}")
        sys.exit(1)

    if not args.node:
        # Aggregator feeds are inputs only and have no legacy view of their own
        names = [name for name in names if hasattr(directory.get(addresses[name]), "legacy")]

    logger.info("=" * 60)
    logger.info(f"Graph:             {args.graph}")
    logger.info(f"Nodes:             {len(addresses)}")
    logger.info("=" * 60)

    failed = False
    for name in names:
        address = addresses[name]
        try:
            view = directory.legacy(address)
            _, answer, _, updated_at, _ = view.latest_round_data()
        except ProxyError as e:
            logger.error(f"{name} ({address}): {e}")
            failed = True
            continue
        logger.info(
            f"{name} ({address}): answer={answer} decimals={view.decimals()} "
            f"updatedAt={updated_at} version={view.version()}"
        )

    if failed:
        sys.exit(1)


if __name__ == "__main__":
    main()
