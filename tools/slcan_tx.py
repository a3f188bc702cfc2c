#!/usr/bin/env python3
"""
SLCAN/LAWICEL TX tool for CANHacker-compatible adapters.
Sends a counter frame with ID=0x123 at a fixed interval.

Usage: slcan_tx.py <COM_PORT> [num_frames|loop] [interval_ms]
"""

import sys
import time

import serial

from slcan import BitRate, CanSocket, StandardId, open_serial


def main():
    if len(sys.argv) < 2:
        print("Usage: slcan_tx.py <COM_PORT> [num_frames] [interval_ms]")
        print("       slcan_tx.py <COM_PORT> loop [interval_ms]  - continuous mode")
        print("Example: slcan_tx.py COM3 100 20")
        print("         slcan_tx.py COM8 loop 20")
        return 1

    port = sys.argv[1]
    loop_mode = len(sys.argv) > 2 and sys.argv[2].lower() == 'loop'
    num_frames = 0 if loop_mode else (int(sys.argv[2]) if len(sys.argv) > 2 else 100)
    interval_ms = int(sys.argv[3]) if len(sys.argv) > 3 else 20

    print(f"SLCAN TX Test - {port}")
    print("=" * 50)
    if loop_mode:
        print(f"Mode: CONTINUOUS (Ctrl+C to stop), Interval: {interval_ms}ms")
    else:
        print(f"Frames: {num_frames}, Interval: {interval_ms}ms")
    print("=" * 50)

    try:
        ser = open_serial(port)
    except serial.SerialException as e:
        print(f"Error opening {port}: {e}")
        return 1

    can = CanSocket(ser)

    print("\nInitializing adapter...")
    can.close()
    can.open(BitRate.SETUP_500KBIT)
    time.sleep(0.2)
    ser.reset_input_buffer()

    can_id = StandardId(0x123)
    sent = 0
    start = time.time()
    i = 0

    try:
        while loop_mode or i < num_frames:
            data = [i & 0xFF, (i >> 8) & 0xFF, 0xAA, 0xBB, 0xCC, 0xDD, 0xEE, 0xFF]
            can.write(can_id, data)
            sent += 1

            time.sleep(interval_ms / 1000.0)

            if sent % 10 == 0:
                elapsed = time.time() - start
                rate = sent / elapsed if elapsed > 0 else 0
                print(f"\r  Sent: {sent}, Rate: {rate:.0f} fps", end="", flush=True)

            i += 1

    except KeyboardInterrupt:
        print("\n\nStopped by user.")

    elapsed = time.time() - start

    can.close()
    ser.close()

    print(f"\n{'=' * 50}")
    print("RESULTS")
    print("=" * 50)
    print(f"  Sent: {sent}")
    print(f"  Time: {elapsed:.1f}s")
    if elapsed > 0:
        print(f"  Rate: {sent/elapsed:.0f} fps")
    print("=" * 50)
    return 0


if __name__ == "__main__":
    sys.exit(main())
