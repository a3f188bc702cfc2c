#!/usr/bin/env python3
"""
SLCAN frame dump
Opens the adapter and prints every received CAN frame as it arrives.

Usage: python slcan_dump.py /dev/ttyACM0 [bitrate]
Press Ctrl+C to stop.
"""

import sys
import time

import serial
from rich.console import Console

from slcan import BitRate, CanSocket, FrameError, WouldBlock, open_serial


def format_frame(frame, elapsed):
    id_str = f"{frame.id.raw:08X}" if frame.is_extended else f"{frame.id.raw:03X}"
    data_str = ' '.join(f'{b:02X}' for b in frame.payload)
    return f"{elapsed:10.4f}  {id_str:>8}  [{frame.dlc}]  {data_str}"


def main():
    if len(sys.argv) < 2:
        print("Usage: python slcan_dump.py <COM_PORT> [bitrate]")
        return 1

    port = sys.argv[1]
    bitrate = int(sys.argv[2]) if len(sys.argv) > 2 else 500000
    console = Console()

    try:
        setup = BitRate.from_bps(bitrate)
    except ValueError as e:
        console.print(f"[red]{e}[/red]")
        return 1

    console.print(f"Connecting to {port}...")
    try:
        ser = open_serial(port)
    except serial.SerialException as e:
        console.print(f"[red]Error: {e}[/red]")
        return 1

    can = CanSocket(ser)
    can.close()
    can.open(setup)

    console.print(f"Listening at {bitrate // 1000} kbps (Ctrl+C to stop)")
    console.print("-" * 60)
    console.print("    Time (s)        ID  DLC  Data")
    console.print("-" * 60)

    frame_count = 0
    bad_lines = 0
    start = time.time()

    try:
        while True:
            try:
                frame = can.read()
            except WouldBlock:
                time.sleep(0.001)
                continue
            except FrameError as e:
                bad_lines += 1
                console.print(f"[yellow]skipped line: {e}[/yellow]")
                continue

            frame_count += 1
            console.print(format_frame(frame, time.time() - start), highlight=False)

    except KeyboardInterrupt:
        console.print("\n" + "-" * 60)
        console.print(f"Received {frame_count} frames, {bad_lines} bad lines")

    except serial.SerialException as e:
        console.print(f"[red]Error: {e}[/red]")
        return 1

    finally:
        try:
            can.close()
        except serial.SerialException:
            pass  # port already gone
        ser.close()

    return 0


if __name__ == "__main__":
    sys.exit(main())
