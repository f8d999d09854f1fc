import argparse
import sys
from typing import Optional

import strongbox
import strongbox.manage
from strongbox import ErrorKind
from strongbox._output import TerminalBackend, output

EXIT_CODES = {
    ErrorKind.ARGUMENT: 4,
    ErrorKind.NOT_FOUND: 6,
    ErrorKind.AUTHENTICATION: 7,
    ErrorKind.IO: 8,
    ErrorKind.CORRUPT_DATA: 9,
}


def main(args: Optional[list] = None) -> None:
    parser = argparse.ArgumentParser(
        description=(
            "strongbox v{}: encrypted secrets with per-service access"
        ).format(strongbox.__version__),
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
    )
    parser.set_defaults(func=parser.print_usage)

    parser.add_argument(
        "-d", "--debug", action="store_true", help="Enable debug mode."
    )
    parser.add_argument(
        "--passphrase",
        default=None,
        help="The phrase to encrypt and decrypt the secrets file "
        "(default: $STRONGBOX_PASSPHRASE).",
    )
    parser.add_argument(
        "--secrets-file",
        default=None,
        help="The secrets file to use (default: $STRONGBOX_SECRETS_FILE, "
        "the setting in strongbox.cfg or secrets.json).",
    )

    subparsers = parser.add_subparsers()

    p = subparsers.add_parser(
        "set",
        help="Set a secret. Overwrites an existing secret "
        "but keeps its access list.",
    )
    p.add_argument("name", help="The name of the secret.")
    p.add_argument("value", help="The secret to encrypt and save.")
    p.set_defaults(func=strongbox.manage.set_secret)

    p = subparsers.add_parser("get", help="Show the value of a secret.")
    p.add_argument("name", help="The name of the secret.")
    p.set_defaults(func=strongbox.manage.get_secret)

    p = subparsers.add_parser(
        "list", help="List all secrets and who has access."
    )
    p.set_defaults(func=strongbox.manage.list_secrets)

    p = subparsers.add_parser("remove", help="Remove a secret.")
    p.add_argument("name", help="The name of the secret to remove.")
    p.set_defaults(func=strongbox.manage.remove_secret)

    p = subparsers.add_parser(
        "add-access",
        help="Give a service access to secrets and show its access token.",
    )
    p.add_argument("service_name", help="The name of the service.")
    p.add_argument(
        "secrets", help="Comma separated list of secret names."
    )
    p.set_defaults(func=strongbox.manage.add_access)

    p = subparsers.add_parser(
        "get-access-token", help="Show the access token of a service."
    )
    p.add_argument("service_name", help="The name of the service.")
    p.set_defaults(func=strongbox.manage.get_access_token)

    p = subparsers.add_parser(
        "remove-access",
        help="Remove a service's access to some secrets. "
        "The service keeps its token.",
    )
    p.add_argument("service_name", help="The name of the service.")
    p.add_argument(
        "secrets", help="Comma separated list of secret names."
    )
    p.set_defaults(func=strongbox.manage.remove_access)

    p = subparsers.add_parser(
        "revoke-service",
        help="Remove a service and its access to all secrets.",
    )
    p.add_argument("service_name", help="The name of the service.")
    p.set_defaults(func=strongbox.manage.revoke_service)

    p = subparsers.add_parser(
        "change-passphrase", help="Re-encrypt with a new passphrase."
    )
    p.add_argument("new_passphrase", help="The new passphrase.")
    p.set_defaults(func=strongbox.manage.change_passphrase)

    args = parser.parse_args(args)

    # Consume global arguments
    output.enable_debug = args.debug

    # Pass over to function
    if args.func.__name__ == "print_usage":
        args.func()
        sys.exit(1)

    output.backend = TerminalBackend()

    func_args = dict(args._get_kwargs())
    del func_args["func"]
    del func_args["debug"]
    try:
        return args.func(**func_args)
    except strongbox.ReportingException as e:
        e.report()
        sys.exit(EXIT_CODES[e.kind])
