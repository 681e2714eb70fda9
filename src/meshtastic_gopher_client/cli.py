"""Command-line interface for the Meshtastic Gopher client."""

import argparse
import logging
import signal
import sys
from dataclasses import replace

from .config import Config, load_config
from .core import FetchClient
from .providers import SocketConnector
from .transport import MeshtasticTransport
from .server import GopherMeshClient


def setup_logging(verbose: bool = False) -> None:
    """Configure logging."""
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description="Meshtastic Gopher Client - Browse Gopherspace over mesh radio",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s                                   # Use default config
  %(prog)s -c config.yaml                    # Use specific config file
  %(prog)s --home menu.txt                   # Custom home listing
  %(prog)s -u gopher://gopher.floodgap.com   # Open a URL for new nodes
  %(prog)s --serial /dev/ttyUSB0             # Use specific serial port
  %(prog)s --ble AA:BB:CC:DD:EE:FF           # Use Bluetooth device
  %(prog)s --tcp 192.168.1.100               # Use TCP connection
""",
    )

    parser.add_argument(
        "-c", "--config",
        metavar="FILE",
        help="Path to YAML configuration file",
    )

    parser.add_argument(
        "--home",
        metavar="FILE",
        help="Gopher menu file to use as the home listing",
    )

    parser.add_argument(
        "-u", "--start-url",
        metavar="URL",
        help="Gopher URL opened when a node first connects",
    )

    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Enable verbose logging",
    )

    conn_group = parser.add_mutually_exclusive_group()
    conn_group.add_argument(
        "--serial",
        metavar="PORT",
        nargs="?",
        const="auto",
        help="Use serial connection (default: auto-detect)",
    )
    conn_group.add_argument(
        "--ble",
        metavar="ADDRESS",
        help="Use Bluetooth LE connection",
    )
    conn_group.add_argument(
        "--tcp",
        metavar="HOST",
        help="Use TCP connection",
    )

    return parser.parse_args(argv)


def build_config(args: argparse.Namespace) -> Config:
    """
    Load the config file, if any, and apply command line overrides.

    Raises:
        FileNotFoundError: If the config file doesn't exist.
    """
    config = load_config(args.config) if args.config else Config()

    if args.home:
        config = replace(config, home_listing=args.home)
    if args.start_url:
        config = replace(config, start_url=args.start_url)

    if args.serial is not None:
        device = None if args.serial == "auto" else args.serial
        config = replace(config, connection_type="serial", device=device)
    elif args.ble:
        config = replace(config, connection_type="ble", device=args.ble)
    elif args.tcp:
        config = replace(config, connection_type="tcp", device=args.tcp)

    return config


def main(argv: list[str] | None = None) -> int:
    """Main entry point."""
    args = parse_args(argv)
    setup_logging(args.verbose)

    logger = logging.getLogger(__name__)

    try:
        config = build_config(args)
    except FileNotFoundError:
        logger.error(f"Config file not found: {args.config}")
        return 1

    try:
        fetcher = FetchClient(SocketConnector(config.connect_timeout), encoding=config.encoding)
        transport = MeshtasticTransport(
            connection_type=config.connection_type,
            device=config.device,
        )
        client = GopherMeshClient(transport, fetcher, config)
    except OSError as e:
        logger.error(f"Failed to initialize client: {e}")
        return 1

    def signal_handler(sig, frame):
        logger.info("Shutdown signal received")
        client.stop()
        sys.exit(0)

    signal.signal(signal.SIGINT, signal_handler)
    signal.signal(signal.SIGTERM, signal_handler)

    logger.info("Starting Gopher client...")
    logger.info(f"  Home listing: {config.home_listing or '(built-in)'}")
    logger.info(f"  Connection: {config.connection_type}" + (f" ({config.device})" if config.device else ""))
    logger.info(f"  Max message size: {config.max_message_size}")

    try:
        client.start()
        logger.info("Client running. Press Ctrl+C to stop.")
        signal.pause()
    except Exception as e:
        logger.error(f"Client error: {e}")
        return 1
    finally:
        client.stop()

    return 0


if __name__ == "__main__":
    sys.exit(main())
