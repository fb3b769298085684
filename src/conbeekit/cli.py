"""
conbee-lights - inspect and switch lights on a deCONZ / Hue v1 bridge

Usage:
    conbee-lights list                  # all lights, ordered by id
    conbee-lights show 3                # one light
    conbee-lights on 3 / off 3          # power
    conbee-lights ct 3 200 370          # brightness 200, 370 mired
    conbee-lights xy 3 0.32 0.45        # CIE xy color
    conbee-lights rename 3 "Desk lamp"

Bridge address and API key come from --host / --api-key or from
CONBEE_HOST / CONBEE_API_KEY (a .env file is honoured).
"""

import argparse
import logging
import sys
from typing import Optional

from conbeekit.api.errors import ConbeeError
from conbeekit.config.settings import BridgeSettings
from conbeekit.models.light import State
from conbeekit.services.lights_client import LightsClient

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="conbee-lights",
        description=__doc__,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("--host", help="bridge host[:port], overrides CONBEE_HOST")
    parser.add_argument("--api-key", help="bridge API key, overrides CONBEE_API_KEY")
    parser.add_argument("--timeout", type=float, help="request timeout in seconds")
    parser.add_argument("-v", "--verbose", action="store_true", help="log HTTP traffic")

    sub = parser.add_subparsers(dest="cmd", required=True)

    sub.add_parser("list", help="show all lights")

    p_show = sub.add_parser("show", help="show one light")
    p_show.add_argument("light_id", type=int)

    for name in ("on", "off"):
        p_power = sub.add_parser(name, help=f"switch a light {name}")
        p_power.add_argument("light_id", type=int)

    p_ct = sub.add_parser("ct", help="set brightness and color temperature")
    p_ct.add_argument("light_id", type=int)
    p_ct.add_argument("bri", type=int, help="brightness 1-254")
    p_ct.add_argument("ct", type=int, help="color temperature in mired, 154-500")

    p_xy = sub.add_parser("xy", help="set CIE xy color")
    p_xy.add_argument("light_id", type=int)
    p_xy.add_argument("x", type=float)
    p_xy.add_argument("y", type=float)

    p_rename = sub.add_parser("rename", help="rename a light")
    p_rename.add_argument("light_id", type=int)
    p_rename.add_argument("name")

    return parser


def _make_client(args: argparse.Namespace) -> LightsClient:
    if args.host and args.api_key:
        return LightsClient(args.host, args.api_key, timeout=args.timeout)

    settings = BridgeSettings.from_env(host=args.host, api_key=args.api_key, timeout=args.timeout)
    return LightsClient.from_settings(settings)


def _print_responses(responses) -> None:
    for response in responses:
        print(response)


def run(args: argparse.Namespace) -> None:
    client = _make_client(args)

    if args.cmd == "list":
        print("\n".join(str(light) for light in client.fetch_all_lights()), end="")
    elif args.cmd == "show":
        print(client.fetch_light(args.light_id), end="")
    elif args.cmd in ("on", "off"):
        state = State().set_power(args.cmd == "on")
        _print_responses(client.set_light_state(args.light_id, state))
    elif args.cmd == "ct":
        state = State().set_color_temperature(args.bri, args.ct)
        _print_responses(client.set_light_state(args.light_id, state))
    elif args.cmd == "xy":
        state = State().set_xy(args.x, args.y)
        _print_responses(client.set_light_state(args.light_id, state))
    elif args.cmd == "rename":
        _print_responses(client.set_light_name(args.light_id, args.name))


def main(argv: Optional[list[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    try:
        run(args)
    except ConbeeError as e:
        logger.debug("command %s failed", args.cmd, exc_info=True)
        print(f"error: {e}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
