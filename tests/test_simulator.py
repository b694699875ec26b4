"""Tests for the simulator command line."""

from __future__ import annotations

from tools.simulator.simulate import build_parser


def test_negative_base_latitude_parses():
    args = build_parser().parse_args(["--base=-1.2921,36.8219", "--duration", "5"])
    assert args.base == "-1.2921,36.8219"
    assert args.duration == 5
