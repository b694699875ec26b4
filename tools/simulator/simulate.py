#!/usr/bin/env python3
"""Wild animal tracker telemetry simulator.

Generates a synthetic animal wandering away from a base location and posts
telemetry samples and location fixes to a running tracker.

Usage:
    # Walk north-east for 2 minutes, one event per second
    python -m tools.simulator.simulate --server http://localhost:8000 --duration 120

    # Start at a specific base, faster animal, occasional bad vitals
    python -m tools.simulator.simulate --base=-1.2921,36.8219 --speed 3.0 --sick-rate 0.2
"""

from __future__ import annotations

import argparse
import asyncio
import json
import math
import random
import time
from dataclasses import dataclass

import httpx


@dataclass
class SimAnimal:
    lat: float
    lon: float
    bearing: float
    speed_mps: float
    motion_mps2: float = 0.0
    samples_sent: int = 0
    fixes_sent: int = 0
    errors: int = 0


def make_sample_payload(animal: SimAnimal, sick_rate: float) -> dict:
    """Create one upstream telemetry payload."""
    sick = random.random() < sick_rate
    hr = random.uniform(40, 140) if sick else random.uniform(62, 98)
    spo2 = random.uniform(85, 94) if sick else random.uniform(95, 100)
    sys_bp = random.uniform(85, 165) if sick else random.uniform(112, 138)
    temp = random.uniform(35.0, 40.0) if sick else random.uniform(36.6, 38.4)
    return {
        "hr_bpm": round(hr),
        "spo2_pct": round(spo2, 1),
        "bp_sys": round(sys_bp),
        "bp_dia": round(sys_bp * 0.65),
        "tcore_c": round(temp, 1),
        "tsurr_c": round(temp - random.uniform(2, 5), 1),
        "hsurr_pct": round(random.uniform(20, 60), 1),
        "motion_mps2": round(animal.motion_mps2, 2),
        "bpsig_amp": round(random.uniform(0.5, 2.0), 2),
        "struggle_flag": 1 if sick and random.random() < 0.3 else 0,
        "last_update_ms": int(time.time() * 1000),
    }


def move_animal(animal: SimAnimal, dt_seconds: float) -> None:
    """Move the animal along its bearing, with random turns and speed changes."""
    animal.bearing = (animal.bearing + random.uniform(-20, 20)) % 360

    previous_speed = animal.speed_mps
    animal.speed_mps = max(0.0, min(6.0, animal.speed_mps + random.uniform(-0.5, 0.5)))
    animal.motion_mps2 = abs(animal.speed_mps - previous_speed) / dt_seconds + random.uniform(0, 0.3)

    distance_m = animal.speed_mps * dt_seconds
    bearing_rad = math.radians(animal.bearing)

    # Approximate: 1 degree latitude ~ 111,000 m
    dlat = (distance_m * math.cos(bearing_rad)) / 111_000
    dlon = (distance_m * math.sin(bearing_rad)) / (111_000 * math.cos(math.radians(animal.lat)))

    animal.lat += dlat
    animal.lon += dlon


async def _post(client: httpx.AsyncClient, url: str, payload: dict) -> bool:
    try:
        resp = await client.post(
            url,
            content=json.dumps(payload),
            headers={"content-type": "application/json"},
        )
        return resp.status_code == 200
    except httpx.RequestError:
        return False


async def run_simulation(args: argparse.Namespace) -> None:
    """Run the full simulation."""
    base_lat, base_lon = args.base
    animal = SimAnimal(
        lat=base_lat,
        lon=base_lon,
        bearing=random.uniform(0, 360),
        speed_mps=args.speed,
    )

    print(f"Starting simulation: {args.duration}s, one event every {args.interval}s")
    print(f"  Base: {base_lat:.4f}, {base_lon:.4f}")
    print(f"  Server: {args.server}")
    print()

    end_time = time.monotonic() + args.duration
    async with httpx.AsyncClient(timeout=10.0) as client:
        while time.monotonic() < end_time:
            move_animal(animal, args.interval)

            if await _post(client, f"{args.server}/api/v1/telemetry",
                           make_sample_payload(animal, args.sick_rate)):
                animal.samples_sent += 1
            else:
                animal.errors += 1

            if random.random() < args.fix_error_rate:
                fix = {"error": "Timeout expired"}
            else:
                fix = {
                    "latitude_deg": animal.lat,
                    "longitude_deg": animal.lon,
                    "accuracy_m": random.randint(3, 25),
                    "timestamp_ms": int(time.time() * 1000),
                }
            if await _post(client, f"{args.server}/api/v1/location", fix):
                animal.fixes_sent += 1
            else:
                animal.errors += 1

            await asyncio.sleep(args.interval)

        print(f"Simulation complete")
        print(f"  Samples sent: {animal.samples_sent}")
        print(f"  Fixes sent: {animal.fixes_sent}")
        print(f"  Errors: {animal.errors}")

        try:
            resp = await client.get(f"{args.server}/api/v1/state")
        except httpx.RequestError:
            return
        if resp.status_code == 200:
            state = resp.json()
            boundary = state["boundary"]
            print(f"\nTracker state:")
            print(f"  Distance from base: {state['distance_km']:.3f} km")
            print(f"  Zone: {boundary['zone'] if boundary else 'inactive'}")
            print(f"  Active alerts: {len(state['alerts'])}")
            print(f"  History points: {len(state['history'])}")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Wild animal tracker telemetry simulator")
    parser.add_argument("--server", default="http://localhost:8000", help="Server URL")
    parser.add_argument("--duration", type=int, default=60, help="Simulation duration in seconds")
    parser.add_argument("--interval", type=float, default=1.0, help="Seconds between events")
    parser.add_argument("--base", type=str, default="-1.2921,36.8219",
                        help="Base lat,lon (default: Nairobi)")
    parser.add_argument("--speed", type=float, default=1.5, help="Initial speed in m/s")
    parser.add_argument("--sick-rate", type=float, default=0.1,
                        help="Probability that a sample carries abnormal vitals")
    parser.add_argument("--fix-error-rate", type=float, default=0.05,
                        help="Probability that a location fix fails")
    return parser


def main():
    args = build_parser().parse_args()

    # Parse base
    lat, lon = args.base.split(",")
    args.base = (float(lat), float(lon))

    asyncio.run(run_simulation(args))


if __name__ == "__main__":
    main()
