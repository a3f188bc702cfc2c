#!/usr/bin/env python3
"""
Play back CANHacker .trc files via SLCAN.
Respects original timing, including multiple frames at the same timestamp.
"""

import sys
import time

import serial

from slcan import BitRate, CanSocket, open_serial
from slcan.trc import group_by_timestamp, parse_trc_file


def main():
    if len(sys.argv) < 3:
        print("Usage: trc_playback.py <TRC_FILE> <COM_PORT> [speed_multiplier] [loop]")
        print("Example: trc_playback.py trace.trc COM8 1.0")
        print("         trc_playback.py trace.trc COM8 1.0 loop")
        print("  speed_multiplier: 1.0 = realtime, 2.0 = 2x speed, 0 = as fast as possible")
        print("  loop: repeat trace continuously (Ctrl+C to stop)")
        return 1

    trc_file = sys.argv[1]
    port = sys.argv[2]
    speed_mult = float(sys.argv[3]) if len(sys.argv) > 3 else 1.0
    loop_mode = len(sys.argv) > 4 and sys.argv[4].lower() == 'loop'

    print(f"TRC Playback - {trc_file}")
    print("=" * 60)

    print("Parsing TRC file...")
    entries = parse_trc_file(trc_file)
    print(f"  Loaded {len(entries)} frames")

    if not entries:
        print("No frames found!")
        return 1

    grouped = group_by_timestamp(entries)
    print(f"  Grouped into {len(grouped)} time slots")
    print(f"  Max frames per millisecond: {max(len(g[1]) for g in grouped)}")

    trace_start_ms = grouped[0][0]
    duration_sec = (grouped[-1][0] - trace_start_ms) / 1000.0
    unique_ids = set(frame.id for _, frame in entries)

    print(f"  Duration: {duration_sec:.1f}s")
    print(f"  Unique CAN IDs: {len(unique_ids)}")
    if speed_mult > 0:
        print(f"  Playback speed: {speed_mult}x (ETA: {duration_sec/speed_mult:.1f}s)")
    else:
        print("  Playback speed: MAX (as fast as possible)")
    if loop_mode:
        print("  Loop mode: ON (Ctrl+C to stop)")
    print("=" * 60)

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

    print(f"\nPlaying back {len(entries)} frames in {len(grouped)} time slots...")
    print("Start your receiver now!\n")
    time.sleep(2)

    sent = 0
    errors = 0
    loop_count = 0
    playback_start = time.time()

    try:
        while True:
            loop_start = time.time()
            loop_count += 1

            for slot_idx, (slot_time_ms, slot_frames) in enumerate(grouped):
                if speed_mult > 0:
                    target_time = loop_start + ((slot_time_ms - trace_start_ms) / 1000.0) / speed_mult
                    now = time.time()
                    if target_time > now:
                        time.sleep(target_time - now)

                for frame in slot_frames:
                    can.write(frame.id, frame.payload)
                    sent += 1
                    # 8-byte frame is ~0.23ms on the wire at 500kbps
                    if len(slot_frames) > 1:
                        time.sleep(0.0003)

                ser.flush()

                if (slot_idx + 1) % 500 == 0:
                    # BEL from the adapter means a rejected frame
                    errors += ser.read(ser.in_waiting).count(b'\x07')

                    elapsed = time.time() - playback_start
                    if loop_mode:
                        print(f"\r  Loop {loop_count} - Sent: {sent}, Errors: {errors}, Elapsed: {elapsed:.1f}s", end="", flush=True)
                    else:
                        pct = 100 * (slot_idx + 1) / len(grouped)
                        print(f"\r  {pct:.0f}% - Sent: {sent}, Errors: {errors}, Elapsed: {elapsed:.1f}s", end="", flush=True)

            if not loop_mode:
                break

            time.sleep(0.1)

    except KeyboardInterrupt:
        print("\n\nStopped by user.")

    elapsed = time.time() - playback_start

    time.sleep(0.2)
    errors += ser.read(ser.in_waiting).count(b'\x07')

    can.close()
    ser.close()

    print(f"\n{'=' * 60}")
    print("PLAYBACK COMPLETE")
    print("=" * 60)
    print(f"  Loops:          {loop_count}")
    print(f"  Frames sent:    {sent}")
    print(f"  TX errors:      {errors}")
    print(f"  Elapsed time:   {elapsed:.1f}s")
    if elapsed > 0:
        print(f"  Effective rate: {sent/elapsed:.0f} fps")
    print("=" * 60)
    return 0


if __name__ == "__main__":
    sys.exit(main())
