"""
Lanes CLI

A command-line utility for reaching EC2 instances grouped into lanes. It
lists the servers in each lane, connects to them over SSH with the settings
configured for their lane, and manages the profiles holding the AWS
credentials and SSH settings.
"""

import argparse
import subprocess
import sys
from typing import List, Optional

from botocore.exceptions import BotoCoreError, ClientError

from .config import load_config, resolve_profile_name
from .ec2 import Server
from .errors import LanesError, ProfileNotFoundError, ServerNotFoundError
from .profiles import (
    get_profile_path,
    get_sample_profile,
    harden_permissions,
    list_profiles,
    load_profile,
    profile_from_aws,
)
from .utils import generate_completion, SHELLS

TABLE_COLUMNS = ["#", "Lane", "Name", "ID", "IP", "State"]


def format_server_table(servers: List[Server]) -> str:
    """Format servers for display."""
    if not servers:
        return "No servers found."

    rows = [TABLE_COLUMNS]
    for i, svr in enumerate(servers, 1):
        rows.append([str(i), svr.lane, svr.name, svr.id, svr.address or "-", svr.state or "-"])

    widths = [max(len(row[col]) for row in rows) for col in range(len(TABLE_COLUMNS))]
    lines = ["  ".join(cell.ljust(w) for cell, w in zip(row, widths)).rstrip() for row in rows]
    return "\n".join(lines)


def mask_secret(secret: str) -> str:
    """Hide all but the last four characters of a secret."""
    if len(secret) <= 4:
        return "*" * 8
    return "*" * 8 + secret[-4:]


def select_server(servers: List[Server], selector: Optional[str] = None) -> Server:
    """
    Pick one server by name, instance ID or 1-based index.

    Without a selector the lane must contain exactly one server.
    """
    if not servers:
        raise ServerNotFoundError("no servers found")

    if selector is None:
        if len(servers) == 1:
            return servers[0]
        raise ServerNotFoundError(
            f"{len(servers)} servers found, choose one of: "
            f"{', '.join(str(s) for s in servers)}"
        )

    if selector.isdigit():
        index = int(selector)
        if 1 <= index <= len(servers):
            return servers[index - 1]

    for svr in servers:
        if selector in (svr.name, svr.id):
            return svr

    raise ServerNotFoundError(f"no server matching {selector!r}")


def _load_active_profile(args):
    config = load_config()
    name = resolve_profile_name(args.profile, config)
    return load_profile(name, config)


def handle_list(args):
    """Handle the list command."""
    prof = _load_active_profile(args)
    if args.lane:
        servers = prof.fetch_servers_in_lane(args.lane)
    else:
        servers = prof.fetch_servers()
    print(format_server_table(servers))


def handle_ssh(args):
    """Handle the ssh command."""
    prof = _load_active_profile(args)
    server = select_server(prof.fetch_servers_in_lane(args.lane), args.server)

    ssh_args = server.get_ssh_args()
    print(f"Connecting to {server} at {server.address}...")
    code = subprocess.call(ssh_args)
    if code != 0:
        sys.exit(code)


def handle_profile_list(args):
    """Handle the profile list command."""
    names = list_profiles()
    if not names:
        print("No lane profiles found.")
        return

    active = resolve_profile_name(args.profile, load_config())
    for name in names:
        marker = "→ " if name == active else "  "
        print(f"{marker}{name}")


def handle_profile_show(args):
    """Handle the profile show command."""
    prof = load_profile(args.name)
    prof.aws_secret_access_key = mask_secret(prof.aws_secret_access_key)
    print(prof.to_yaml(), end="")


def handle_profile_init(args):
    """Handle the profile init command."""
    if args.from_aws:
        prof = profile_from_aws(args.from_aws, template=get_sample_profile())
    else:
        prof = get_sample_profile()

    prof.set_overwrite(args.force)
    dest = prof.write(args.name)
    print(f"\nEdit {dest} to configure the lanes for this profile.")


def handle_profile_switch(args):
    """Handle the profile switch command."""
    if not get_profile_path(args.name, False).exists():
        raise ProfileNotFoundError(f"profile {args.name!r} not found")

    config = load_config()
    config.profile = args.name
    config.write()
    print(f"Switched to profile: {args.name}")


def handle_profile_fix_perms(args):
    """Handle the profile fix-perms command."""
    path = get_profile_path(args.name, False)
    if not path.exists():
        raise ProfileNotFoundError(f"profile {args.name!r} not found")

    harden_permissions(path)
    print(f"Restricted permissions on {path}")


def handle_completion(args):
    """Handle the completion command."""
    print(generate_completion(args.shell))


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="lanes",
        description="Lanes - Reach EC2 instances grouped into lanes over SSH"
    )
    parser.add_argument("--profile", "-p", help="Lane profile to use (defaults to the configured profile)")
    subparsers = parser.add_subparsers(dest="command", help="Command to run")

    # List command
    list_parser = subparsers.add_parser("list", aliases=["ls"], help="List servers")
    list_parser.add_argument("lane", nargs="?", help="Only list servers in this lane")
    list_parser.set_defaults(func=handle_list)

    # SSH command
    ssh_parser = subparsers.add_parser("ssh", help="Connect to a server in a lane")
    ssh_parser.add_argument("lane", help="Lane of the server")
    ssh_parser.add_argument("server", nargs="?", help="Server name, instance ID or number from the list")
    ssh_parser.set_defaults(func=handle_ssh)

    # Profile commands
    profile_parser = subparsers.add_parser("profile", help="Manage lane profiles")
    profile_sub = profile_parser.add_subparsers(dest="profile_command", help="Profile command to run")

    plist_parser = profile_sub.add_parser("list", help="List lane profiles")
    plist_parser.set_defaults(func=handle_profile_list)

    show_parser = profile_sub.add_parser("show", help="Show a lane profile")
    show_parser.add_argument("name", help="Profile name")
    show_parser.set_defaults(func=handle_profile_show)

    init_parser = profile_sub.add_parser("init", help="Create a lane profile from the sample")
    init_parser.add_argument("name", help="Profile name")
    init_parser.add_argument("--from-aws", metavar="AWS_PROFILE",
                             help="Copy credentials from an AWS CLI profile")
    init_parser.add_argument("--force", "-f", action="store_true",
                             help="Overwrite an existing profile")
    init_parser.set_defaults(func=handle_profile_init)

    switch_parser = profile_sub.add_parser("switch", help="Make a profile the default")
    switch_parser.add_argument("name", help="Profile name")
    switch_parser.set_defaults(func=handle_profile_switch)

    perms_parser = profile_sub.add_parser("fix-perms", help="Restrict profile file permissions")
    perms_parser.add_argument("name", help="Profile name")
    perms_parser.set_defaults(func=handle_profile_fix_perms)

    # Completion command
    comp_parser = subparsers.add_parser("completion", aliases=["comp"],
                                        help="Generate shell completion configuration")
    comp_parser.add_argument("shell", nargs="?",
                             help=f"Shell to generate for: {', '.join(SHELLS)} (defaults to $SHELL)")
    comp_parser.set_defaults(func=handle_completion)

    return parser


def main(argv: Optional[List[str]] = None):
    parser = build_parser()
    args = parser.parse_args(argv)

    if not hasattr(args, "func"):
        parser.print_help()
        sys.exit(0)

    try:
        args.func(args)
    except (LanesError, ClientError, BotoCoreError) as e:
        print(f"Error: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
