#!/usr/bin/env python3
"""
Meshcat Client Command Line

Drives a running meshcat-server. Start the viewer first:

    meshcat-server --open

Usage:
    # Publish every primitive, a point cloud and spin some boxes
    meshcat-client demo

    # Animate object and background properties
    meshcat-client properties --frames 50

    # Publish a robot description
    meshcat-client urdf path/to/robot.urdf

    # Remove a subtree
    meshcat-client delete /robot

    # Custom server / configuration
    meshcat-client --endpoint tcp://192.168.0.10:6000 --config path/to/config.yaml demo
"""

import argparse
import sys
from typing import List, Optional

from meshcat_client.config import Config, ConfigManager
from meshcat_client.demos import run_demo, run_properties_demo
from meshcat_client.errors import MeshcatError
from meshcat_client.urdf import load_urdf
from meshcat_client.utils.terminal import TerminalDisplay, create_progress_bar, format_channel_stats
from meshcat_client.visualizer import Meshcat


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Send scene commands to a meshcat-server")

    parser.add_argument(
        "--config",
        type=str,
        default=None,
        help="Path to configuration file (default: <project-root>/config.yaml)",
    )
    parser.add_argument(
        "--endpoint",
        type=str,
        default=None,
        help="ZMQ URL of meshcat-server (default: from config, tcp://127.0.0.1:6000)",
    )
    parser.add_argument(
        "--timeout",
        type=int,
        default=None,
        help="Reply timeout in milliseconds (default: from config)",
    )
    parser.add_argument(
        "--retries",
        type=int,
        default=None,
        help="Resend attempts after a timeout (default: from config)",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Print every command and reply",
    )
    parser.add_argument(
        "--no-footer",
        action="store_true",
        help="Disable the live status footer",
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    for name, help_text in (
        ("demo", "Publish the demo scene and animate it"),
        ("properties", "Animate object and background properties"),
    ):
        sub = subparsers.add_parser(name, help=help_text)
        sub.add_argument("--frames", type=int, default=None, help="Animation frames (default: from config)")
        sub.add_argument("--frame-delay", type=float, default=None,
                         help="Seconds between frames (default: from config)")

    urdf = subparsers.add_parser("urdf", help="Publish a URDF robot description")
    urdf.add_argument("path", type=str, help="Path to the .urdf file")
    urdf.add_argument("--collision", action="store_true", help="Publish collision geometry")

    delete = subparsers.add_parser("delete", help="Delete a scene path and its subtree")
    delete.add_argument("path", type=str, help="Scene path, e.g. /robot")

    return parser


def apply_overrides(config: Config, args: argparse.Namespace) -> Config:
    """Command line flags take precedence over config.yaml."""
    if args.endpoint is not None:
        config.meshcat.endpoint = args.endpoint
    if args.timeout is not None:
        config.meshcat.timeout_ms = args.timeout
    if args.retries is not None:
        config.meshcat.retries = args.retries
    if args.verbose:
        config.meshcat.verbose = True
    if getattr(args, "frames", None) is not None:
        config.demo.frames = args.frames
    if getattr(args, "frame_delay", None) is not None:
        config.demo.frame_delay = args.frame_delay
    return config


def run_command(meshcat: Meshcat, args: argparse.Namespace, config: Config, terminal: TerminalDisplay):
    """Execute one subcommand against a connected visualizer."""
    endpoint = config.meshcat.endpoint

    def on_frame(frame: int, total: int):
        stats = meshcat.channel.get_stats() if hasattr(meshcat.channel, "get_stats") else {}
        terminal.update_footer(
            {endpoint: True},
            format_channel_stats(stats, create_progress_bar(frame, total)),
        )

    if args.command == "demo":
        run_demo(meshcat, config.demo.frames, config.demo.frame_delay, on_frame=on_frame)
        terminal.print(f"✓ Demo scene published ({len(meshcat.scene)} nodes)", "[Meshcat]")
    elif args.command == "properties":
        run_properties_demo(meshcat, config.demo.frames, config.demo.frame_delay, on_frame=on_frame)
        terminal.print("✓ Property animation finished", "[Meshcat]")
    elif args.command == "urdf":
        names = load_urdf(meshcat, args.path, collision=args.collision)
        terminal.print(f"✓ Published {args.path} ({len(names)} links and joints)", "[Meshcat]")
    elif args.command == "delete":
        meshcat.delete(args.path)
        terminal.print(f"✓ Deleted {args.path}", "[Meshcat]")


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for the meshcat client."""
    parser = build_parser()
    args = parser.parse_args(argv)

    config = apply_overrides(ConfigManager.load(args.config), args)

    terminal = TerminalDisplay(enable_footer=not args.no_footer)
    terminal.print(f"Connecting to meshcat-server at {config.meshcat.endpoint}...", "[Meshcat]")

    try:
        with Meshcat(config=config.meshcat) as meshcat, terminal:
            terminal.update_footer({config.meshcat.endpoint: meshcat.is_connected()})
            run_command(meshcat, args, config, terminal)
    except (MeshcatError, OSError) as e:
        terminal.print(f"✗ {e}", "[Meshcat]")
        return 1
    except KeyboardInterrupt:
        terminal.print("Interrupted", "[Meshcat]")
        return 130

    return 0


if __name__ == "__main__":
    sys.exit(main())
