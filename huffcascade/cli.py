"""
cli.py - command line driver.

Encodes FILE into FILE.enc, or decodes FILE.enc back into FILE. Each file is
handled on its own: a failure is logged and the remaining files are still
processed.
"""

import argparse
import logging

import yaml
from dotenv import load_dotenv

from .compression import Compressor
from .config_loader import load_config
from .errors import HuffcascadeError

logger = logging.getLogger(__name__)


def encode_file(path, compressor, extension):
    """Encodes one file and returns the name of the file written."""
    with open(path, "rb") as f:
        data = f.read()
    artifact = compressor.compress(data)

    out_path = path + extension
    with open(out_path, "wb") as f:
        f.write(artifact)
    logger.info("Encoded %s -> %s (%d -> %d bytes, depth %d)",
                path, out_path, len(data), len(artifact), artifact[0])
    return out_path


def decode_file(path, compressor, extension):
    """Decodes one file and returns the name of the file written."""
    if not path.endswith(extension) or len(path) == len(extension):
        raise ValueError(f"{path} does not have the {extension} extension")
    with open(path, "rb") as f:
        artifact = f.read()
    data = compressor.decompress(artifact)

    out_path = path[:-len(extension)]
    with open(out_path, "wb") as f:
        f.write(data)
    logger.info("Decoded %s -> %s (%d -> %d bytes)", path, out_path, len(artifact), len(data))
    return out_path


def build_parser():
    parser = argparse.ArgumentParser(
        prog="huffcascade",
        description="Lossless compression by repeated Huffman coding.")
    parser.add_argument("-c", "--config", help="path of the YAML configuration file")
    parser.add_argument("-v", "--verbose", action="store_true", help="log every round")

    subparsers = parser.add_subparsers(dest="command", required=True)
    encode_parser = subparsers.add_parser("encode", help="compress files")
    encode_parser.add_argument("--method", choices=sorted(Compressor.VALID_METHODS),
                               help="override compression.method")
    encode_parser.add_argument("--max-depth", type=int, help="override compression.max_depth")
    encode_parser.add_argument("files", nargs="+")

    decode_parser = subparsers.add_parser("decode", help="restore encoded files")
    decode_parser.add_argument("files", nargs="+")
    return parser


def main(argv=None):
    load_dotenv()
    args = build_parser().parse_args(argv)

    try:
        config = load_config(args.config)
    except (OSError, ValueError, yaml.YAMLError) as e:
        logging.basicConfig(level=logging.WARNING)
        logger.error("Invalid settings: %s", e)
        return 2

    log_config = config["logging"]
    logging.basicConfig(level=logging.DEBUG if args.verbose else log_config["level"],
                        format=log_config["format"])

    if args.command == "encode":
        if args.method is not None:
            config["compression"]["method"] = args.method
        if args.max_depth is not None:
            config["compression"]["max_depth"] = args.max_depth
        handler = encode_file
    else:
        handler = decode_file

    try:
        compressor = Compressor.from_config(config)
    except ValueError as e:
        logger.error("Invalid settings: %s", e)
        return 2
    extension = config["files"]["extension"]

    failures = 0
    for path in args.files:
        try:
            handler(path, compressor, extension)
        except (OSError, HuffcascadeError, ValueError) as e:
            logger.error("Failed to %s %s: %s", args.command, path, e)
            failures += 1

    if failures:
        logger.warning("%d of %d files failed", failures, len(args.files))
        return 1
    return 0
