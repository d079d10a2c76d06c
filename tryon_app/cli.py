"""
Command-line interface for the accessory try-on system.
"""

import argparse
import logging
from pathlib import Path

from rich.console import Console

from tryon_app.app import run_camera, setup_logging
from tryon_app.config import AppConfig
from tryon_app.core.types import AccessoryType
from tryon_app.pipeline.processor import TryOnProcessor

console = Console()


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Virtual accessory try-on",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Live preview from the default webcam
  python -m tryon_app.cli

  # Render a tiara onto a video
  python -m tryon_app.cli --video input.mp4 --output tiara.mp4 --accessory tiara

  # Use custom configuration
  python -m tryon_app.cli --config custom_config.yaml

  # Write the default configuration to a file
  python -m tryon_app.cli --write-config config.yaml
        """,
    )

    parser.add_argument(
        "--video",
        type=Path,
        help="Input video file (omit for live camera)",
    )

    parser.add_argument(
        "--output",
        type=Path,
        help="Rendered output video path",
    )

    parser.add_argument(
        "--camera",
        type=int,
        default=None,
        help="Camera index for live preview",
    )

    parser.add_argument(
        "--accessory",
        choices=[a.value for a in AccessoryType],
        default=None,
        help="Accessory to render",
    )

    parser.add_argument(
        "--config",
        type=Path,
        help="Configuration file (YAML)",
    )

    parser.add_argument(
        "--write-config",
        type=Path,
        metavar="PATH",
        help="Write the effective configuration to PATH and exit",
    )

    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Enable debug logging",
    )

    return parser


def load_config(args: argparse.Namespace) -> AppConfig:
    """Build the effective configuration from a file and CLI overrides."""
    config = AppConfig.from_yaml(args.config) if args.config else AppConfig()

    if args.accessory:
        config.render.accessory = AccessoryType.parse(args.accessory)
    if args.camera is not None:
        config.camera_index = args.camera

    return config


def main(argv=None) -> int:
    """Main CLI entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    setup_logging(logging.DEBUG if args.verbose else logging.WARNING)

    try:
        config = load_config(args)
    except (OSError, TypeError, ValueError) as e:
        console.print(f"[red]Error loading configuration:[/red] {e}")
        return 1

    issues = config.validate()
    if issues:
        console.print("[yellow]Configuration warnings:[/yellow]")
        for issue in issues:
            console.print(f"  - {issue}")

    if args.write_config:
        config.to_yaml(args.write_config)
        console.print(f"[green]✓[/green] Wrote configuration: {args.write_config}")
        return 0

    if not args.video:
        if args.output:
            parser.error("--output requires --video")
        try:
            return run_camera(config)
        except (RuntimeError, ValueError) as e:
            console.print(f"[red]Error initializing pipeline:[/red] {e}")
            return 1

    try:
        processor = TryOnProcessor(config)
    except (RuntimeError, ValueError) as e:
        console.print(f"[red]Error initializing pipeline:[/red] {e}")
        return 1

    try:
        results = processor.process_video(
            video_path=args.video,
            output_path=args.output,
            show_progress=True,
        )
    except ValueError as e:
        console.print(f"\n[red]Error processing video:[/red] {e}")
        return 1
    finally:
        processor.close()

    tracked = [r for r in results if r is not None]
    console.print(f"\n[bold green]✓ Processing complete![/bold green]")
    console.print(f"  Total frames: {len(results)}")
    console.print(f"  Frames with tracking: {len(tracked)}")
    if tracked:
        with_pose = [r.pose_confidence for r in tracked if r.pose_confidence is not None]
        if with_pose:
            console.print(f"  Mean pose confidence: {sum(with_pose) / len(with_pose):.2f}")

    return 0


if __name__ == "__main__":
    raise SystemExit(main())
