"""
Relayer client for gas-sponsored Safe transactions.

Turns wallet intents (deploy the Safe, execute calls, redeem/split/merge
CTF positions) into signed transaction requests, submits them to the
relayer and polls them to a terminal state.

Each request opens its own ``httpx.AsyncClient``; the client itself
keeps no mutable state after construction. The Safe nonce is fetched
fresh for every ``execute`` call, so callers sharing one client must
serialize writes to the same wallet themselves.

Example:
    ```python
    client = RelayerClient(
        "https://relayer-v2.polymarket.com",
        137,
        signer=LocalSigner(private_key),
        builder_credentials=BuilderCredentials.from_env(),
    )
    response = await client.redeem_positions(condition_id)
    tx = await client.wait_for_transaction(response.transaction_id)
    ```
"""

from __future__ import annotations

import asyncio
import json
from typing import Any, Dict, List, Optional, Sequence

import httpx
from pydantic import ValidationError

from polyrelay.config import ContractConfig, RelayerConfig, get_contract_config
from polyrelay.constants import (
    BINARY_PARTITION,
    DEFAULT_DATA_API_URL,
    DEFAULT_MAX_POLLS,
    DEFAULT_POLL_INTERVAL_MS,
    DEFAULT_TIMEOUT_MS,
    REDEEMABLE_PAGE_LIMIT,
    REDEEMABLE_SIZE_THRESHOLD,
)
from polyrelay.encoding.abi import UintLike
from polyrelay.encoding.ctf import (
    encode_approve_or_max,
    encode_merge_positions,
    encode_redeem_positions,
    encode_split_position,
)
from polyrelay.encoding.multisend import aggregate_transactions
from polyrelay.errors import (
    ApiError,
    AuthenticationRequiredError,
    ConfigurationError,
    PolyRelayError,
    TransactionFailedError,
    WalletStateError,
)
from polyrelay.signing.builder_auth import generate_builder_headers
from polyrelay.signing.safe_address import derive_safe_address
from polyrelay.signing.signer import Signer, sign_safe_hash
from polyrelay.signing.typed_data import create_safe_create_hash, create_safe_tx_hash
from polyrelay.types.relayer import (
    BuilderCredentials,
    DeployedResponse,
    NonceResponse,
    PositionRecord,
    RedeemablePosition,
    RedeemResult,
    RelayerSubmitResponse,
    RelayerTransaction,
    SignatureParams,
    TransactionRequest,
    TransactionType,
    WalletCall,
)
from polyrelay.utils.logging import get_logger
from polyrelay.utils.validation import validate_address, validate_calls, validate_metadata

logger = get_logger(__name__)

SUBMIT_PATH = "/submit"


class RelayerClient:
    """
    Async client for the Polymarket relayer.

    Read operations (``get_deployed``, ``get_nonce``, ``get_transaction``,
    ``wait_for_transaction``, ``get_redeemable_positions``) need no
    credentials. Deploying and executing need a signer and builder
    credentials.

    Args:
        relayer_url: Relayer base URL
        chain_id: Chain id (137 Polygon, 80002 Amoy)
        signer: Signer owning the Safe wallet
        builder_credentials: Builder API credentials for ``/submit``
        data_api_url: Data API base URL for position lookups
        timeout: Request timeout in milliseconds

    Raises:
        UnsupportedChainError: If ``chain_id`` has no contract configuration
        ConfigurationError: If ``relayer_url`` is empty
    """

    def __init__(
        self,
        relayer_url: str,
        chain_id: int,
        signer: Optional[Signer] = None,
        builder_credentials: Optional[BuilderCredentials] = None,
        *,
        data_api_url: str = DEFAULT_DATA_API_URL,
        timeout: int = DEFAULT_TIMEOUT_MS,
    ) -> None:
        if not relayer_url:
            raise ConfigurationError("relayer_url is required")

        self._contract_config = get_contract_config(chain_id)
        self._relayer_url = relayer_url.rstrip("/")
        self._chain_id = chain_id
        self._signer = signer
        self._builder_credentials = builder_credentials
        self._data_api_url = data_api_url.rstrip("/")
        self._timeout = timeout

    @classmethod
    def from_config(
        cls,
        config: RelayerConfig,
        signer: Optional[Signer] = None,
        builder_credentials: Optional[BuilderCredentials] = None,
    ) -> RelayerClient:
        """Create a client from a RelayerConfig."""
        return cls(
            config.relayer_url,
            config.chain_id,
            signer,
            builder_credentials,
            data_api_url=config.data_api_url,
            timeout=config.timeout,
        )

    @property
    def chain_id(self) -> int:
        return self._chain_id

    @property
    def contract_config(self) -> ContractConfig:
        return self._contract_config

    @property
    def relayer_url(self) -> str:
        return self._relayer_url

    @property
    def address(self) -> str:
        """Signer EOA address (lowercase)."""
        return self._require_signer().address.lower()

    def __repr__(self) -> str:
        return (
            f"RelayerClient(relayer_url={self._relayer_url!r}, "
            f"chain_id={self._chain_id})"
        )

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    def get_expected_safe(self) -> str:
        """
        Derive the Safe wallet address owned by the signer.

        Raises:
            AuthenticationRequiredError: If the client has no signer
        """
        return derive_safe_address(self.address, self._contract_config.safe_factory)

    async def get_deployed(self, safe_address: str) -> bool:
        """Check whether ``safe_address`` has been deployed."""
        data = await self._get_json(
            f"{self._relayer_url}/deployed", params={"address": safe_address}
        )
        return self._parse(DeployedResponse, data).deployed

    async def get_nonce(
        self,
        address: str,
        tx_type: TransactionType = TransactionType.SAFE,
    ) -> str:
        """
        Fetch the current nonce for signing.

        For SAFE transactions ``address`` is the signer EOA; the relayer
        resolves the Safe and returns the Safe's nonce.
        """
        data = await self._get_json(
            f"{self._relayer_url}/nonce",
            params={"address": address, "type": TransactionType(tx_type).value},
        )
        return self._parse(NonceResponse, data).nonce

    async def get_transaction(self, transaction_id: str) -> List[RelayerTransaction]:
        """Fetch a transaction by id. The relayer answers with a list."""
        data = await self._get_json(
            f"{self._relayer_url}/transaction", params={"id": transaction_id}
        )
        if not isinstance(data, list):
            data = [data]
        return [self._parse(RelayerTransaction, item) for item in data]

    # ------------------------------------------------------------------
    # Writes
    # ------------------------------------------------------------------

    async def deploy(self) -> RelayerSubmitResponse:
        """
        Deploy the signer's Safe wallet through the proxy factory.

        Raises:
            AuthenticationRequiredError: If signer or credentials are missing
            WalletStateError: If the Safe is already deployed
        """
        signer = self._require_signer()
        self._require_builder_credentials()

        safe_address = self.get_expected_safe()
        if await self.get_deployed(safe_address):
            raise WalletStateError(
                f"Safe {safe_address} is already deployed",
                safe_address=safe_address,
                deployed=True,
            )

        digest = create_safe_create_hash(self._contract_config.safe_factory, self._chain_id)
        request = TransactionRequest(
            tx_type=TransactionType.SAFE_CREATE,
            from_address=self.address,
            to=self._contract_config.safe_factory,
            proxy_wallet=safe_address,
            data="0x",
            signature=sign_safe_hash(signer, digest),
            signature_params=SignatureParams.for_safe_create(),
        )
        return await self._submit_transaction(request)

    async def execute(
        self,
        calls: Sequence[WalletCall],
        metadata: Optional[str] = None,
    ) -> RelayerSubmitResponse:
        """
        Execute one or more calls through the Safe wallet.

        Several calls are bundled into a single multisend DELEGATECALL.

        Args:
            calls: Calls to execute, in order
            metadata: Optional label stored by the relayer (max 500 chars)

        Raises:
            AuthenticationRequiredError: If signer or credentials are missing
            InvalidParameterError: If ``calls`` is empty or metadata too long
            WalletStateError: If the Safe is not deployed
        """
        signer = self._require_signer()
        self._require_builder_credentials()
        validate_calls(calls)
        validate_metadata(metadata)

        safe_address = self.get_expected_safe()
        if not await self.get_deployed(safe_address):
            raise WalletStateError(
                f"Safe {safe_address} is not deployed",
                safe_address=safe_address,
                deployed=False,
            )

        from_address = self.address
        nonce = await self.get_nonce(from_address, TransactionType.SAFE)
        call = aggregate_transactions(calls, self._contract_config.safe_multisend)

        digest = create_safe_tx_hash(
            self._chain_id,
            safe_address,
            call.to,
            call.value,
            call.data,
            call.operation,
            nonce,
        )
        request = TransactionRequest(
            tx_type=TransactionType.SAFE,
            from_address=from_address,
            to=call.to,
            proxy_wallet=safe_address,
            data=call.data,
            signature=sign_safe_hash(signer, digest),
            value=call.value,
            nonce=nonce,
            signature_params=SignatureParams.for_safe_execution(call.operation),
            metadata=metadata,
        )
        return await self._submit_transaction(request)

    async def redeem_positions(
        self,
        condition_id: str,
        index_sets: Sequence[UintLike] = BINARY_PARTITION,
        metadata: Optional[str] = None,
    ) -> RelayerSubmitResponse:
        """
        Redeem resolved positions of a condition for collateral.

        Args:
            condition_id: Condition id (bytes32 hex)
            index_sets: Outcome index sets to redeem, both outcomes by default
            metadata: Optional label
        """
        data = encode_redeem_positions(
            self._contract_config.collateral, condition_id, index_sets
        )
        return await self.execute([WalletCall(to=self._contract_config.ctf, data=data)], metadata)

    async def split_position(
        self,
        condition_id: str,
        amount: UintLike,
        metadata: Optional[str] = None,
    ) -> RelayerSubmitResponse:
        """Split ``amount`` collateral into a full set of outcome tokens."""
        data = encode_split_position(self._contract_config.collateral, condition_id, amount)
        return await self.execute([WalletCall(to=self._contract_config.ctf, data=data)], metadata)

    async def merge_positions(
        self,
        condition_id: str,
        amount: UintLike,
        metadata: Optional[str] = None,
    ) -> RelayerSubmitResponse:
        """Merge ``amount`` of each outcome token back into collateral."""
        data = encode_merge_positions(self._contract_config.collateral, condition_id, amount)
        return await self.execute([WalletCall(to=self._contract_config.ctf, data=data)], metadata)

    async def approve_collateral(
        self,
        spender: Optional[str] = None,
        amount: Optional[UintLike] = None,
        metadata: Optional[str] = None,
    ) -> RelayerSubmitResponse:
        """
        Approve collateral spending from the Safe.

        Args:
            spender: Spender address, the CTF contract by default
            amount: Allowance in base units, unlimited by default
            metadata: Optional label
        """
        spender = (
            validate_address(spender, "spender") if spender else self._contract_config.ctf
        )
        call = WalletCall(
            to=self._contract_config.collateral,
            data=encode_approve_or_max(spender, amount),
        )
        return await self.execute([call], metadata)

    # ------------------------------------------------------------------
    # Polling
    # ------------------------------------------------------------------

    async def wait_for_transaction(
        self,
        transaction_id: str,
        max_polls: int = DEFAULT_MAX_POLLS,
        poll_interval_ms: int = DEFAULT_POLL_INTERVAL_MS,
    ) -> Optional[RelayerTransaction]:
        """
        Poll a transaction until it reaches a terminal state.

        Args:
            transaction_id: Relayer transaction id
            max_polls: Maximum number of polls
            poll_interval_ms: Delay between polls in milliseconds

        Returns:
            The transaction once mined or confirmed, or None if no
            terminal state was seen within ``max_polls`` polls

        Raises:
            TransactionFailedError: If the relayer reports FAILED or INVALID
        """
        for attempt in range(1, max_polls + 1):
            transactions = await self.get_transaction(transaction_id)
            tx = transactions[0] if transactions else None
            state = tx.get_state() if tx else None

            logger.debug(
                "Polled transaction",
                extra={
                    "transaction_id": transaction_id,
                    "attempt": attempt,
                    "state": tx.state if tx else None,
                },
            )

            if tx is not None and state is not None:
                if state.is_success:
                    logger.info(
                        "Transaction confirmed",
                        extra={
                            "transaction_id": transaction_id,
                            "state": state.value,
                            "transaction_hash": tx.transaction_hash,
                        },
                    )
                    return tx
                if state.is_failure:
                    logger.error(
                        "Transaction failed",
                        extra={"transaction_id": transaction_id, "state": state.value},
                    )
                    raise TransactionFailedError(
                        transaction_id,
                        state.value,
                        transaction_hash=tx.transaction_hash,
                    )

            if attempt < max_polls:
                await asyncio.sleep(poll_interval_ms / 1000)

        logger.warning(
            "Transaction not terminal after polling",
            extra={"transaction_id": transaction_id, "max_polls": max_polls},
        )
        return None

    # ------------------------------------------------------------------
    # Positions
    # ------------------------------------------------------------------

    async def get_redeemable_positions(
        self,
        user_address: str,
        data_api_url: Optional[str] = None,
    ) -> List[RedeemablePosition]:
        """
        Fetch positions in resolved markets that are worth redeeming.

        Args:
            user_address: Position holder, normally the Safe address
            data_api_url: Override for the data API base URL

        Records that cannot be redeemed (e.g. a negative outcome index)
        are logged and skipped so the rest of the page stays usable.

        Returns:
            Positions with a current value above zero
        """
        base_url = (data_api_url or self._data_api_url).rstrip("/")
        data = await self._get_json(
            f"{base_url}/positions",
            params={
                "user": user_address,
                "redeemable": "true",
                "sizeThreshold": REDEEMABLE_SIZE_THRESHOLD,
                "limit": REDEEMABLE_PAGE_LIMIT,
                "offset": 0,
                "sortBy": "CURRENT",
                "sortDirection": "DESC",
            },
        )
        if not isinstance(data, list):
            raise ApiError(
                200,
                json.dumps(data),
                url=f"{base_url}/positions",
                message="Expected a list of positions",
            )

        positions: List[RedeemablePosition] = []
        for item in data:
            record = self._parse(PositionRecord, item)
            if record.current_value <= 0:
                continue
            try:
                positions.append(RedeemablePosition.from_record(record))
            except ValidationError as e:
                logger.warning(
                    "Skipping unredeemable position",
                    extra={"condition_id": record.condition_id, "error": str(e)},
                )
        return positions

    async def redeem_all_positions(
        self,
        data_api_url: Optional[str] = None,
    ) -> List[RedeemResult]:
        """
        Redeem every redeemable position held by the signer's Safe.

        Each position is redeemed for its own outcome (index set
        ``1 << outcome_index``). A failing position is recorded in its
        result and the batch continues.

        Returns:
            One RedeemResult per redeemable position, in API order
        """
        safe_address = self.get_expected_safe()
        positions = await self.get_redeemable_positions(safe_address, data_api_url)

        results: List[RedeemResult] = []
        for position in positions:
            try:
                response = await self.redeem_positions(
                    position.condition_id,
                    [position.index_set],
                    f"Redeem: {position.title}",
                )
                results.append(RedeemResult(position=position, response=response))
            except (PolyRelayError, httpx.HTTPError) as e:
                logger.warning(
                    "Failed to redeem position",
                    extra={
                        "condition_id": position.condition_id,
                        "error": str(e),
                        "retryable": not isinstance(e, PolyRelayError) or e.retryable,
                    },
                )
                results.append(RedeemResult(position=position, error=e))
        return results

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _require_signer(self) -> Signer:
        if self._signer is None:
            raise AuthenticationRequiredError("signer")
        return self._signer

    def _require_builder_credentials(self) -> BuilderCredentials:
        if self._builder_credentials is None:
            raise AuthenticationRequiredError("builder credentials")
        return self._builder_credentials

    def _http_timeout(self) -> httpx.Timeout:
        return httpx.Timeout(self._timeout / 1000)

    @staticmethod
    def _decode(response: httpx.Response, url: str) -> Any:
        if response.status_code < 200 or response.status_code >= 300:
            raise ApiError(response.status_code, response.text, url=url)
        try:
            return response.json()
        except ValueError:
            raise ApiError(
                response.status_code,
                response.text,
                url=url,
                message=f"Invalid JSON response from {url}",
            ) from None

    @staticmethod
    def _parse(model: Any, data: Any) -> Any:
        try:
            return model.model_validate(data)
        except ValidationError as e:
            raise ApiError(
                200,
                json.dumps(data, default=str),
                message=f"Unexpected {model.__name__} payload: {e.error_count()} errors",
            ) from e

    async def _get_json(self, url: str, params: Optional[Dict[str, Any]] = None) -> Any:
        async with httpx.AsyncClient(timeout=self._http_timeout()) as client:
            response = await client.get(url, params=params)
        return self._decode(response, url)

    async def _submit_transaction(self, request: TransactionRequest) -> RelayerSubmitResponse:
        credentials = self._require_builder_credentials()
        body = request.to_json()
        headers = generate_builder_headers(credentials, "POST", SUBMIT_PATH, body).as_dict()
        headers["Content-Type"] = "application/json"

        logger.info(
            "Submitting transaction",
            extra={
                "type": request.tx_type.value,
                "proxy_wallet": request.proxy_wallet,
                "nonce": request.nonce,
            },
        )

        url = f"{self._relayer_url}{SUBMIT_PATH}"
        async with httpx.AsyncClient(timeout=self._http_timeout()) as client:
            response = await client.post(url, content=body, headers=headers)

        if response.status_code < 200 or response.status_code >= 300:
            logger.error(
                "Relayer rejected transaction",
                extra={"status": response.status_code, "type": request.tx_type.value},
            )
        result = self._parse(RelayerSubmitResponse, self._decode(response, url))
        logger.info(
            "Transaction submitted",
            extra={"transaction_id": result.transaction_id, "state": result.state},
        )
        return result


__all__ = ["RelayerClient", "SUBMIT_PATH"]
