#!/usr/bin/env python3

# SPDX-License-Identifier: AGPL-3.0-or-later
# Copyright (C) 2026 Chukwuemeka Obi
# Copyright (C) 2026 Adaeze Nwankwo

"""Docxreview tools for reviewing degree-class imports from the command line.

Upload a .docx document, look over the review session the server builds
from it, then approve records and commit them.  Sessions expire on the
server after a few hours.

The server can be given on the command line; the environment variable
DOCXREVIEW_SERVER or the config file provide the default.  Authentication
uses a bearer token from DOCXREVIEW_TOKEN, or asked for at the prompt.
"""

__copyright__ = "Copyright (C) 2025-2026 Chukwuemeka Obi, Adaeze Nwankwo, et al"
__credits__ = "The Docxreview Developers"
__license__ = "AGPL-3.0-or-later"

import argparse
import logging
import os
from pathlib import Path
import sys

import arrow
from stdiomask import getpass

from docxreview.auth import Authorizer, Token_Env_Var
from docxreview.common import __version__
from docxreview.config import (
    cfgfile,
    logdir,
    read_config,
    timeouts_from_config,
    write_default_config,
)
from docxreview.exceptions import DocxReviewException, SessionGone
from docxreview.ledger import FilterType
from docxreview.cli import (
    approve_and_commit,
    export_data,
    show_review,
    show_stats,
    start_messenger,
    upload_document,
)
from docxreview.workflow import ImportReview


log = logging.getLogger("cli")


def get_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description=__doc__.split("\n")[0],
        epilog="\n".join(__doc__.split("\n")[1:]),
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "--version", action="version", version="%(prog)s " + __version__
    )
    sub = parser.add_subparsers(dest="command")

    def _add_server_args(x):
        x.add_argument(
            "-s",
            "--server",
            metavar="URL",
            action="store",
            help="""
                URL of the portal server.  If the scheme is omitted, https is
                used.  Defaults to DOCXREVIEW_SERVER, then the config file.
            """,
        )
        x.add_argument(
            "--role",
            choices=["super_admin", "admin", "sub_admin", "manager"],
            help="Your admin role; defaults to the config file's.",
        )

    def _add_view_args(x):
        x.add_argument(
            "--search",
            default="",
            help="Only records whose matric number or name contains this.",
        )
        x.add_argument(
            "--filter",
            dest="filter_type",
            default="all",
            choices=[f.value for f in FilterType],
            help="Which records to show or act on (default: all).",
        )

    s = sub.add_parser(
        "upload",
        help="Upload a .docx document for review.",
        description="Upload a .docx document (at most 10 MB) and print the new session id.",
    )
    _add_server_args(s)
    s.add_argument("docx", type=Path, help="the document to upload")

    s = sub.add_parser(
        "review",
        help="Show the records of an import session.",
        description="Fetch an import session and print its statistics and records.",
    )
    _add_server_args(s)
    _add_view_args(s)
    s.add_argument("session_id")

    s = sub.add_parser(
        "approve",
        help="Approve records of a session and apply the updates.",
        description="""
            Fetch an import session, approve the listed matric numbers (or
            everything in view with --all) and submit all decisions.  A
            session can only be applied once.
        """,
    )
    _add_server_args(s)
    _add_view_args(s)
    s.add_argument("session_id")
    s.add_argument("matric", nargs="*", help="matric numbers to approve")
    s.add_argument(
        "--all",
        action="store_true",
        dest="approve_all",
        help="Approve every record needing an update in the current view.",
    )

    s = sub.add_parser(
        "stats",
        help="Show class of degree statistics.",
        description="How many students have a class of degree on file, and their distribution.",
    )
    _add_server_args(s)

    s = sub.add_parser(
        "export",
        help="Download all students' NYSC data as a spreadsheet.",
        description="Download all students' NYSC data as a spreadsheet.",
    )
    _add_server_args(s)
    s.add_argument(
        "--dir",
        type=Path,
        default=Path("."),
        help="Directory to save into (default: current directory).",
    )

    s = sub.add_parser(
        "init-config",
        help="Write a config file with the defaults.",
        description=f"Write a config file with the defaults, by default to {cfgfile}.",
    )
    s.add_argument("--path", type=Path, default=None)

    return parser


def _setup_logging(cfg) -> None:
    kwargs = {}
    if cfg.get("log_to_file"):
        # filename must not have ":" (forbidden on win32)
        now = arrow.now().format("YYYY-MM-DD_HH-mm-ss_ZZZ")
        logfile = f"docxreview-{now}.log"
        try:
            logdir.mkdir(parents=True, exist_ok=True)
            logfile = logdir / logfile
        except PermissionError:
            pass
        kwargs = {"filename": logfile}
    logging.basicConfig(
        format="%(asctime)s %(levelname)5s:%(name)s\t%(message)s",
        datefmt="%b%d %H:%M:%S %Z",
        **kwargs,
    )
    logging.getLogger().setLevel(str(cfg.get("log_level", "info")).upper())


def _review_from_args(args, cfg) -> ImportReview:
    server = args.server or cfg["server"]
    role = args.role or cfg["role"]
    authorizer = Authorizer(role)
    token = os.environ.get(Token_Env_Var)
    if not token:
        token = getpass(prompt="Access token: ")
    msgr = start_messenger(
        server,
        token,
        verify_ssl=cfg["verify_ssl"],
        timeouts=timeouts_from_config(cfg),
    )
    return ImportReview(msgr, authorizer)


def main(args=None) -> int:
    parser = get_parser()
    args = parser.parse_args(args)

    if args.command is None:
        parser.print_help()
        return 0

    if args.command == "init-config":
        try:
            p = write_default_config(args.path)
        except FileExistsError as e:
            print(e)
            return 1
        print(f"Wrote {p}")
        return 0

    try:
        cfg = read_config()
    except ValueError as e:
        print(e)
        return 1
    _setup_logging(cfg)

    review = None
    try:
        review = _review_from_args(args, cfg)
        if args.command == "upload":
            upload_document(args.docx, review=review)
        elif args.command == "review":
            show_review(
                args.session_id,
                search=args.search,
                filter_type=args.filter_type,
                review=review,
            )
        elif args.command == "approve":
            approve_and_commit(
                args.session_id,
                args.matric,
                approve_all=args.approve_all,
                search=args.search,
                filter_type=args.filter_type,
                review=review,
            )
        elif args.command == "stats":
            show_stats(review=review)
        elif args.command == "export":
            export_data(args.dir, review=review)
        else:
            parser.print_help()
    except SessionGone as e:
        print(f"{e}: please upload the document again.")
        return 2
    except (DocxReviewException, KeyError, ValueError, OSError) as e:
        log.debug("command %s failed", args.command, exc_info=True)
        print(e)
        return 1
    finally:
        if review is not None:
            review.msgr.stop()
    return 0


if __name__ == "__main__":
    sys.exit(main())
