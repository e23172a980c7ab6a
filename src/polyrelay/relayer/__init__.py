"""Relayer transaction lifecycle client."""

from polyrelay.relayer.client import SUBMIT_PATH, RelayerClient

__all__ = ["RelayerClient", "SUBMIT_PATH"]
