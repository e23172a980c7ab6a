"""
Relayer module tests for polyrelay.

Tests cover:
- Wire models and state machine (test_types.py)
- RelayerClient reads, deploy/execute, polling and redeem helpers (test_client.py)
"""
