#!/usr/bin/env python3
"""
GPIO Wiring Check Script

Exercise a pin through sysfs to verify wiring and permissions.

Usage:
    python scripts/gpio_check.py status              # Show controller status
    python scripts/gpio_check.py blink 11            # Blink header pin 11
    python scripts/gpio_check.py watch 7 --time 30   # Print changes on pin 7
    python scripts/gpio_check.py --mode bcm blink 17 # Use hardware numbering
    python scripts/gpio_check.py --mock blink 11     # No hardware needed

Run as a user allowed to write /sys/class/gpio/export (root or the gpio group).
"""

import argparse
import logging
import sys
import time
from pathlib import Path

# Add parent directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from config.settings import GPIO_NAMING_MODE, LOG_FORMAT, LOG_LEVEL
from sysfs_gpio import GPIOError, HardwareFactory, PinController, create_sysfs
from sysfs_gpio.pin_map import PinMapConfig

logging.basicConfig(level=LOG_LEVEL, format=LOG_FORMAT)


def show_status(gpio: PinController, pin_config: PinMapConfig) -> bool:
    status = gpio.get_status()
    real_hardware = HardwareFactory.is_real_hardware_available(gpio.sysfs.base_path)

    print("=" * 60)
    print("GPIO Status")
    print("=" * 60)
    for key, value in status.items():
        print(f"{key:16} {value}")
    print(f"{'real_hardware':16} {real_hardware}")
    print(f"{'mapped_headers':16} {pin_config.mapped_positions()}")

    return status["sysfs_available"]


def blink(gpio: PinController, channel: int, count: int) -> bool:
    """Toggle an output channel, reading back each level"""
    result = gpio.setup(channel, gpio.DIR_OUT).result()
    if result.failed:
        print(f"❌ Setup failed: {result.error}")
        return False

    print(f"Blinking channel {channel} {count} times")
    for i in range(count):
        for level in (True, False):
            gpio.write(channel, level)
            readback = gpio.read(channel).result()
            if readback.failed:
                print(f"❌ Read back failed: {readback.error}")
                return False
            print(f"  {i + 1}: wrote {int(level)}, read {readback.value.strip()}")
            time.sleep(0.5)

    print("✅ Blink complete")
    return True


def watch(gpio: PinController, channel: int, duration: float) -> bool:
    """Print every change seen on an input channel"""

    def on_change(changed: int, value: str) -> None:
        print(f"  channel {changed} -> {value.strip()}")

    gpio.add_change_listener(on_change, channel=channel)

    result = gpio.setup(channel, gpio.DIR_IN).result()
    if result.failed:
        print(f"❌ Setup failed: {result.error}")
        return False

    print(f"Watching channel {channel} for {duration}s (Ctrl+C to stop)")
    try:
        time.sleep(duration)
    except KeyboardInterrupt:
        pass

    return True


def main():
    """Main entry point."""
    parser = argparse.ArgumentParser(
        description="Check GPIO wiring through the sysfs interface",
    )
    parser.add_argument(
        "--mode",
        choices=[PinController.MODE_RPI, PinController.MODE_BCM],
        default=GPIO_NAMING_MODE,
        help="Pin numbering: header positions (rpi) or hardware numbers (bcm)",
    )
    parser.add_argument(
        "--mock",
        action="store_true",
        help="Use the simulated sysfs tree",
    )

    subparsers = parser.add_subparsers(dest="command", required=True)
    subparsers.add_parser("status", help="Show controller status")

    blink_parser = subparsers.add_parser("blink", help="Toggle an output pin")
    blink_parser.add_argument("channel", type=int)
    blink_parser.add_argument("--count", type=int, default=5)

    watch_parser = subparsers.add_parser("watch", help="Report input changes")
    watch_parser.add_argument("channel", type=int)
    watch_parser.add_argument("--time", type=float, default=10.0)

    args = parser.parse_args()
    pin_config = PinMapConfig()

    try:
        with PinController(
            sysfs=create_sysfs(force_mock=args.mock),
            pin_map=pin_config.mapping,
            naming_mode=args.mode,
        ) as gpio:
            if args.command == "status":
                success = show_status(gpio, pin_config)
            elif args.command == "blink":
                success = blink(gpio, args.channel, args.count)
            else:
                success = watch(gpio, args.channel, args.time)
    except GPIOError as e:
        print(f"❌ {e}")
        success = False

    sys.exit(0 if success else 1)


if __name__ == "__main__":
    main()
