# CLI argument parsing for regpull

import argparse

from regpull import config


def build_parser():
    p = argparse.ArgumentParser(
        prog="regpull",
        description="List tags and pull image blobs straight from a container registry.",
    )
    p.add_argument(
        "--log-file", "-l",
        dest="log_file",
        help="Path to save a complete log of output",
    )
    p.add_argument(
        "--images-dir", "-o",
        dest="images_dir",
        default=None,
        help=f"Root directory for pulled images (default: {config.IMAGES_DIR})",
    )
    p.add_argument(
        "--timeout",
        type=float,
        default=config.REQUEST_TIMEOUT,
        help="Per-request timeout in seconds (default: none, wait forever)",
    )

    sub = p.add_subparsers(dest="command", metavar="<command>")
    sub.required = True

    list_p = sub.add_parser("list", help="Print the tags of a repository")
    list_p.add_argument("repo", help="<host>/<repository>[:<tag>], tag is ignored")

    pull_p = sub.add_parser("pull", help="Download config and layer blobs")
    pull_p.add_argument("repo", help="<host>/<repository>[:<tag>]")
    return p


def parse_args(argv=None):
    return build_parser().parse_args(argv)
