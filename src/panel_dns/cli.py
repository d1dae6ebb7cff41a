"""Command-line entry point invoked by the ACME client's DNS script hook."""

from __future__ import annotations

import argparse
import getpass
import logging

from panel_dns.config import AppConfig, load_config
from panel_dns.credentials import get_credential_store
from panel_dns.errors import PanelDnsError
from panel_dns.models import Credentials
from panel_dns.panel import get_record_mutator

logger = logging.getLogger(__name__)

_VERBS = ("create", "delete", "setcred")
_DECLINE_TERMS = "declineterms"
_LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="panel-dns-hook",
        description="Create or delete ACME DNS-01 TXT records through the hosting panel",
        epilog=(
            "verbs: create <identifier> <recordName> <token> [DeclineTerms] | "
            "delete <identifier> <recordName> <token> [DeclineTerms] | setcred"
        ),
    )
    parser.add_argument("verb", nargs="?", help="create, delete or setcred")
    # REMAINDER keeps challenge tokens that start with '-' from being read as options
    parser.add_argument("args", nargs=argparse.REMAINDER, help="verb arguments")
    return parser


def _set_credentials(config: AppConfig) -> None:
    username = input("Panel username: ").strip()
    password = getpass.getpass("Panel password: ")
    if not username or not password:
        raise ValueError("Username and password must not be empty")
    get_credential_store(config).save(Credentials(username=username, password=password))


def _mutate(config: AppConfig, verb: str, args: list[str]) -> None:
    identifier, record_name, token = args[:3]
    accept_terms = not (len(args) > 3 and args[3].lower() == _DECLINE_TERMS)
    with get_record_mutator(config) as mutator:
        if verb == "create":
            mutator.create(identifier, record_name, token, accept_terms=accept_terms)
        else:
            mutator.delete(identifier, record_name, token, accept_terms=accept_terms)


def main(argv: list[str] | None = None) -> int:
    """Run one hook invocation and return the process exit code."""
    parser = _build_parser()
    ns = parser.parse_args(argv)
    verb = (ns.verb or "").lower()

    logging.basicConfig(format=_LOG_FORMAT, level=logging.INFO)
    if verb not in _VERBS:
        logger.info("No action taken for verb %r; expected create, delete or setcred", ns.verb)
        return 0

    try:
        config = load_config()
    except ValueError as exc:
        logger.error("%s", exc)
        return 1
    logging.getLogger().setLevel(config.log_level)

    if verb in ("create", "delete") and not 3 <= len(ns.args) <= 4:
        parser.error(f"{verb} expects <identifier> <recordName> <token> [DeclineTerms]")

    try:
        if verb == "setcred":
            _set_credentials(config)
        else:
            _mutate(config, verb, ns.args)
    except (PanelDnsError, ValueError) as exc:
        logger.error("%s failed: %s", verb, exc)
        return 1
    return 0
