import argparse
import logging
import os

import trio

from dropsignal.config import UploaderConfig
from dropsignal.connection.models import UploaderConnection
from dropsignal.exceptions import TransportError
from dropsignal.files import UploadedFile, describe_files
from dropsignal.relay.client import RelayClient
from dropsignal.session.slug import Origin
from dropsignal.uploader import Uploader
from dropsignal.webrtc import WebRTCAsyncBridge, aiortc_peer_factory

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s:%(levelname)s:%(name)s: %(message)s",
    datefmt="%H:%M:%S",
)
logger = logging.getLogger("dropsignal.examples.uploader")


def collect_files(paths: list[str]) -> list[UploadedFile]:
    """Expand directories the way a dropped folder is listed."""
    files = []
    for path in paths:
        if os.path.isdir(path):
            root = os.path.dirname(os.path.abspath(path))
            for dirpath, _, filenames in os.walk(path):
                for name in sorted(filenames):
                    files.append(
                        UploadedFile.from_path(os.path.join(dirpath, name), root)
                    )
        else:
            files.append(UploadedFile.from_path(path))
    return files


def print_connection(connection: UploaderConnection) -> None:
    print(
        f"[PEER {connection.peer_id}] {connection.status.value} "
        f"({connection.completed_files}/{connection.total_files} files)"
    )


async def run(config: UploaderConfig, files: list[UploadedFile]) -> None:
    async with RelayClient.open(config.relay_url, timeout=config.timeout) as relay:
        async with WebRTCAsyncBridge(config.ice_servers) as bridge:
            uploader = Uploader(
                relay,
                Origin.from_url(config.origin_url),
                aiortc_peer_factory(bridge),
                files=files,
                renew_interval=config.renew_interval,
            )
            uploader.tracker.on_change(print_connection)
            try:
                async with uploader.run() as links:
                    for entry in describe_files(files):
                        print(f" - {entry['fileName']}  [{entry['type'] or '?'}]")
                    print(f"\nLong URL:  {links.long_url}")
                    print(f"Short URL: {links.short_url}")
                    print("\nWaiting for receivers, press Ctrl+C to stop.")
                    await trio.sleep_forever()
            except TransportError as e:
                print(f"[ERROR] Could not create a session: {e}")


def main() -> None:
    description = """
    Share files with browsers through a signaling relay. The relay only sees
    session descriptions; files travel over WebRTC data channels.
    """
    parser = argparse.ArgumentParser(description=description)
    parser.add_argument("files", nargs="+", help="files or directories to share")
    parser.add_argument(
        "-r", "--relay", required=True, help="relay origin, e.g. https://relay.local"
    )
    parser.add_argument(
        "--public-origin", default=None, help="origin used in download links"
    )
    parser.add_argument(
        "-i", "--interval", type=float, default=5.0, help="renewal interval (s)"
    )
    parser.add_argument(
        "--ice-server",
        action="append",
        dest="ice_servers",
        help="STUN/TURN URL, may be repeated",
    )
    parser.add_argument("-v", "--verbose", action="store_true")
    args = parser.parse_args()

    if args.verbose:
        logging.getLogger("dropsignal").setLevel(logging.DEBUG)

    config = UploaderConfig(
        relay_url=args.relay,
        public_origin=args.public_origin,
        renew_interval=args.interval,
    )
    if args.ice_servers:
        config.ice_servers = args.ice_servers

    files = collect_files(args.files)
    if not files:
        parser.error("no files to share")

    try:
        trio.run(run, config, files)
    except KeyboardInterrupt:
        logger.info("Stopped by user")


if __name__ == "__main__":
    main()
