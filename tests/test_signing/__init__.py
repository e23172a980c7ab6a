"""
Signing module tests for polyrelay.

Tests cover:
- CREATE2 Safe address derivation (test_safe_address.py)
- EIP-712 domain separators, struct hashes and digests (test_typed_data.py)
- Signer protocol and v-byte adjustment (test_signer.py)
- Builder HMAC headers (test_builder_auth.py)
"""
