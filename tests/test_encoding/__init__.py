"""
Encoding module tests for polyrelay.

Tests cover:
- ABI primitive words and the lenient parse-or-zero policy (test_abi.py)
- CTF and ERC20 calldata (test_ctf.py)
- Multisend packing and aggregation (test_multisend.py)
"""
