import argparse
import logging
import sys
from typing import Optional

from rawfetch.container import Container
from rawfetch.exceptions import FetchError

logger = logging.getLogger("rawfetch")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Fetch one URL over a raw socket.")
    parser.add_argument("url")
    parser.add_argument("--config", help="per-site YAML file with a 'fetch:' section")
    parser.add_argument(
        "--modified-since",
        help="previous fetch time (epoch seconds or ISO datetime); sends If-Modified-Since",
    )
    parser.add_argument("--output", "-o", help="write the body to this file")
    parser.add_argument("--verbose", "-v", action="store_true")
    return parser


def _parse_since(value: Optional[str]):
    if value is None:
        return None
    try:
        return float(value)
    except ValueError:
        return value


def main(argv=None, container: Optional[Container] = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    container = container or Container()

    fetch_config = container.fetch_config()
    if args.config:
        loaded = container.config_file_store().load_config(args.config, base=fetch_config)
        if loaded is None:
            logger.error("No 'fetch' settings found in %s", args.config)
            return 2
        fetch_config = loaded

    try:
        response = container.raw_fetcher().fetch(
            args.url,
            modified_since=_parse_since(args.modified_since),
            config=fetch_config,
        )
    except FetchError as e:
        logger.error("Fetch failed for %s: %s", args.url, e)
        return 1

    print(f"status: {response.status_code}")
    for name, value in response.headers.items():
        print(f"{name}: {value}")

    if args.output:
        with open(args.output, "wb") as f:
            f.write(response.body)
        logger.info("Wrote %d bytes to %s", len(response.body), args.output)
    else:
        logger.info("Body: %d bytes", len(response.body))
    return 0


if __name__ == '__main__':
    sys.exit(main())
