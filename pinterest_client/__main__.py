#!/usr/bin/env python3
"""
Pinterest client command line
Log in once with a cookie file, then reuse it for boards, pins and repins
"""

import argparse
import getpass
import json
import logging
import os
import sys

from . import scraper
from .client import PinterestClient
from .config import load_config

SCRAPE_FIELDS = {
    "preview": scraper.get_pin_preview_url,
    "description": scraper.get_pin_description,
    "image": scraper.get_pin_image_url,
    "pinner": scraper.get_pin_pinner,
}


def build_parser():
    parser = argparse.ArgumentParser(prog="pinterest_client", description='Drive Pinterest through its resource protocol')
    parser.add_argument('--env-file', help='.env file with PINTEREST_* settings')
    parser.add_argument('-v', '--verbose', action='store_true', help='Log requests to stderr')

    sub = parser.add_subparsers(dest='command', required=True)

    def with_cookies(p):
        p.add_argument('--cookies', required=True, help='Cookie file (created on login, reused afterwards)')
        return p

    login = with_cookies(sub.add_parser('login', help='Log in and save the session cookies'))
    login.add_argument('username', help='Username or email')
    login.add_argument('--password',
                       help='Password (default: $PINTEREST_PASSWORD, else prompt)')

    with_cookies(sub.add_parser('boards', help='List your boards'))
    with_cookies(sub.add_parser('account', help='Show the logged-in username'))

    pin = with_cookies(sub.add_parser('pin', help='Pin a link, or repin a pinterest.com/pin/ URL'))
    pin.add_argument('board_id', help='Board ID to pin to')
    pin.add_argument('url', help='Link for the pin')
    pin.add_argument('--description', default='', help='Description for the pin')
    pin.add_argument('--image', help='Image file to upload as the pin preview')

    delete = with_cookies(sub.add_parser('delete', help='Delete a pin'))
    delete.add_argument('pin_id', help='Pinterest pin ID to delete')

    scrape = sub.add_parser('scrape', help='Read metadata from a public pin page')
    scrape.add_argument('url', help='https://www.pinterest.com/pin/<id>/ URL')
    scrape.add_argument('--field', choices=sorted(SCRAPE_FIELDS), default='description')

    return parser


def report(result, payload=None):
    """Print a result as JSON; returns the process exit status"""
    if not result.ok:
        print(f"Error: {result.code.name} ({int(result.code)})", file=sys.stderr)
        return 1

    print(json.dumps(result.value if payload is None else payload, ensure_ascii=False, indent=2))
    return 0


def run_pin(client, args):
    client.pin_url = args.url
    client.pin_description = args.description

    if args.image and not scraper.is_repin_url(args.url):
        with open(args.image, 'rb') as f:
            image_bytes = f.read()
        preview = client.generate_image_preview(image_bytes)
        if not preview.ok:
            return report(preview)

    result = client.pin(args.board_id)
    return report(result, {"pin_id": client.last_pin_id} if result.ok else None)


def main(argv=None):
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        stream=sys.stderr,
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="[%(name)s] %(levelname)s %(message)s",
    )
    config = load_config(args.env_file)

    if args.command == 'scrape':
        return report(SCRAPE_FIELDS[args.field](args.url, config))

    with PinterestClient(args.cookies, config=config) as client:
        if args.command == 'login':
            password = args.password or os.getenv("PINTEREST_PASSWORD") or getpass.getpass("Pinterest password: ")
            result = client.login(args.username, password)
            return report(result, {"logged_in": True, "boards": client.boards} if result.ok else None)

        if not client.is_logged_in:
            print(f"Error: no session in {args.cookies}; run login first", file=sys.stderr)
            return 1

        if args.command == 'boards':
            return report(client.get_boards())

        if args.command == 'account':
            return report(client.get_account_name())

        if args.command == 'pin':
            return run_pin(client, args)

        if args.command == 'delete':
            return report(client.delete_pin(args.pin_id), {"deleted": args.pin_id})

    return 1


if __name__ == "__main__":
    sys.exit(main())
