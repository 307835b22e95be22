# openwrtstats Module - Command Line
# -*- coding: utf-8 -*-
"""
 Python module to aggregate status from OpenWrt style routers

 Command Line:
    python -m openwrtstats get [-format json|text] [-config FILE] [-timeout S]
    python -m openwrtstats serve [-host ADDRESS] [-port PORT]
    python -m openwrtstats version

"""

import argparse
import sys

# Modules
from openwrtstats import version, set_debug, collect
from openwrtstats.config import Settings, load_inventory
from openwrtstats.core.response import to_json
from openwrtstats.models import AggregateReport
from openwrtstats.utils.format import format_uptime, format_bytes


def print_text(report: AggregateReport):
    """Print a human readable summary of a report."""
    print("Router Uptimes:")
    if not report.device_uptimes:
        print("  (no routers configured)")
    for router_id, seconds in report.device_uptimes.items():
        print(f"  {router_id:<20} {format_uptime(seconds)}")
    print(f"\nTotal Connected Devices: {report.total_clients}")
    for network, entries in report.clients_by_network.items():
        print(f"\n{network} ({report.networks_client_counts.get(network, 0)} connected)")
        for entry in entries:
            print(f"  {entry.display_name:<30} up {format_bytes(entry.rx_bytes):>10}"
                  f"  down {format_bytes(entry.tx_bytes):>10}  {format_uptime(entry.connected_seconds)}")


def main(argv=None):
    settings = Settings()

    # Setup parser and groups
    p = argparse.ArgumentParser(prog="openwrtstats", description=f"openwrtstats Module v{version}")
    subparsers = p.add_subparsers(dest="command", title='commands (run <command> -h to see usage information)',
                                  required=True)

    get_args = subparsers.add_parser("get", help='Poll all routers once and print the summary')
    get_args.add_argument("-format", type=str, default="json", choices=["json", "text"],
                          help="Output format: json or text [Default=json]")
    get_args.add_argument("-config", type=str, default=settings.config_file,
                          help=f"Router configuration file [Default={settings.config_file}]")
    get_args.add_argument("-timeout", type=float, default=settings.timeout,
                          help=f"Seconds to wait per router [Default={settings.timeout:.1f}]")

    serve_args = subparsers.add_parser("serve", help='Run the dashboard web server')
    serve_args.add_argument("-host", type=str, default=settings.server_host,
                            help=f"Address to bind [Default={settings.server_host}]")
    serve_args.add_argument("-port", type=int, default=settings.server_port,
                            help=f"Port to listen on [Default={settings.server_port}]")

    subparsers.add_parser("version", help='Print version information')

    # Add a global debug flag
    p.add_argument("-debug", action="store_true", default=False, help="Enable debug output")

    argv = sys.argv[1:] if argv is None else argv
    if not argv:
        p.print_help(sys.stderr)
        return 1

    # parse args
    args = p.parse_args(argv)
    command = args.command

    # Set Debug Mode
    if args.debug:
        set_debug(True)

    if command == 'get':
        overrides = {"config_file": args.config, "timeout": args.timeout}
        if args.config != settings.config_file:
            # An explicit file wins over OWS_ROUTERS
            overrides["routers_json"] = None
        run_settings = settings.model_copy(update=overrides)
        inventory = load_inventory(run_settings)
        report = collect(inventory.routers, timeout=args.timeout, lease_url=inventory.lease_url)
        if args.format == "text":
            print_text(report)
        else:
            print(to_json(report, indent=4))

    elif command == 'serve':
        import uvicorn
        uvicorn.run("openwrtstats.main:app", host=args.host, port=args.port)

    elif command == 'version':
        print("openwrtstats [%s]" % version)

    return 0


if __name__ == "__main__":
    sys.exit(main())
