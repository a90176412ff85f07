"""Shared CLI helpers."""

from __future__ import annotations

import argparse

from agentic.core.providers.types import ParamValue


def base_parser(name: str, description: str) -> argparse.ArgumentParser:
    return argparse.ArgumentParser(prog=name, description=description)


def coerce_param_value(raw: str) -> ParamValue:
    lowered = raw.strip().lower()
    if lowered in {"true", "false"}:
        return lowered == "true"
    try:
        return int(raw)
    except ValueError:
        pass
    try:
        return float(raw)
    except ValueError:
        return raw


def parse_param(item: str) -> tuple[str, ParamValue]:
    key, sep, value = item.partition("=")
    key = key.strip()
    if not sep or not key:
        raise argparse.ArgumentTypeError(f"expected KEY=VALUE, got {item!r}")
    return key, coerce_param_value(value)
