"""
Signing for relayer transactions.

- ``safe_address``: CREATE2 derivation of the owner's Safe wallet
- ``typed_data``: EIP-712 digests for Safe creation and execution
- ``signer``: signer capability and Safe signature production
- ``builder_auth``: HMAC headers for privileged relayer endpoints
"""

from polyrelay.signing.builder_auth import (
    BuilderHeaders,
    build_hmac_signature,
    decode_secret,
    generate_builder_headers,
)
from polyrelay.signing.safe_address import (
    compute_create2_address,
    derive_safe_address,
    safe_salt,
)
from polyrelay.signing.signer import (
    LocalSigner,
    Signer,
    adjust_v,
    sign_safe_hash,
)
from polyrelay.signing.typed_data import (
    create_proxy_struct_hash,
    create_safe_create_hash,
    create_safe_tx_hash,
    eip712_digest,
    factory_domain_separator,
    safe_domain_separator,
    safe_tx_struct_hash,
)

__all__ = [
    # Address derivation
    "compute_create2_address",
    "derive_safe_address",
    "safe_salt",
    # Typed data
    "eip712_digest",
    "factory_domain_separator",
    "safe_domain_separator",
    "create_proxy_struct_hash",
    "safe_tx_struct_hash",
    "create_safe_create_hash",
    "create_safe_tx_hash",
    # Signer
    "Signer",
    "LocalSigner",
    "adjust_v",
    "sign_safe_hash",
    # Builder auth
    "BuilderHeaders",
    "decode_secret",
    "build_hmac_signature",
    "generate_builder_headers",
]
