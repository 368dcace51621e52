"""
Claim Ledger

Turns "this proof is valid" into "exactly one payout per index, ever".

The ledger owns the published root, the campaign deadline and the claim
bitmap. It never sees the tree: every claim is checked with the pure
verify_merkle_proof() against the root it was constructed with.

Check order for claim():
1. Credential gate           -> GateNotSatisfiedException
2. Claim bit for the index   -> AlreadyClaimedException
3. now < deadline            -> WindowClosedException
4. Proof folds to the root   -> InvalidProofException
5. Set bit, transfer, emit   -> TransferFailedException voids the claim

Steps 2-5 run under one lock. A rejected claim leaves the bitmap exactly
as it found it.
"""

from __future__ import annotations

import logging
import threading
import time
from datetime import datetime, timezone
from typing import Callable, Optional, Sequence

from merkledrop.config.runtime import CampaignConfig, DEFAULT_CAMPAIGN_DURATION_S, RuntimeConfig
from merkledrop.crypto.hashing import UINT256_MAX, to_bytes32, to_hex
from merkledrop.ledger.bitmap import ClaimBitmap
from merkledrop.ledger.collaborators import CredentialGate, TokenLedger
from merkledrop.merkle.merkle_tree import leaf_hash, verify_merkle_proof
from merkledrop.schemas.claims import ClaimEvent, PayoutInstruction
from merkledrop.schemas.entries import Entry, normalize_address
from merkledrop.schemas.errors import (
    AlreadyClaimedException,
    ClaimRejectedException,
    ConfigException,
    GateNotSatisfiedException,
    InvalidEntryException,
    InvalidProofException,
    TransferFailedException,
    WindowClosedException,
)

logger = logging.getLogger(__name__)

ClaimListener = Callable[[ClaimEvent], None]
Digest = bytes | str


class ClaimLedger:
    """
    Claim state for one campaign.

    All configuration is fixed at construction and exposed read-only.

    Example:
        >>> ledger = ClaimLedger(tree.root, token_ledger=tokens, credential_gate=gate)
        >>> payout = ledger.claim(proof, leaf, index=1, amount=20, claimant=addr)
        >>> ledger.is_claimed(1)
        True
    """

    def __init__(
        self,
        root: Digest,
        *,
        token_ledger: TokenLedger,
        credential_gate: CredentialGate,
        deadline: Optional[float] = None,
        start: Optional[float] = None,
        duration_s: Optional[float] = None,
        owner: Optional[str] = None,
        token_address: Optional[str] = None,
        credential_address: Optional[str] = None,
        clock: Callable[[], float] = time.time,
        bind_leaf_to_claimant: bool = True,
    ) -> None:
        try:
            self._root = to_bytes32(root)
        except ValueError as e:
            raise ConfigException(f"Invalid Merkle root: {e}") from e

        if deadline is not None and (start is not None or duration_s is not None):
            raise ConfigException("Pass either deadline or start/duration_s, not both")
        if deadline is None:
            if duration_s is None:
                duration_s = DEFAULT_CAMPAIGN_DURATION_S
            if duration_s < 0:
                raise ConfigException(f"Campaign duration must be non-negative, got {duration_s}")
            deadline = (clock() if start is None else start) + duration_s

        self._deadline = float(deadline)
        self._token_ledger = token_ledger
        self._credential_gate = credential_gate
        self._clock = clock
        self._bind_leaf = bind_leaf_to_claimant
        self._owner = _optional_address(owner, "owner")
        self._token_address = _optional_address(token_address, "token_address")
        self._credential_address = _optional_address(credential_address, "credential_address")

        self._claimed = ClaimBitmap()
        self._events: list[ClaimEvent] = []
        self._listeners: list[ClaimListener] = []
        self._lock = threading.Lock()

        logger.info(
            "Claim ledger ready: root %s, deadline %s",
            self.hex_root,
            datetime.fromtimestamp(self._deadline, tz=timezone.utc).isoformat(),
        )

    @classmethod
    def from_config(
        cls,
        config: CampaignConfig | RuntimeConfig,
        *,
        token_ledger: TokenLedger,
        credential_gate: CredentialGate,
        clock: Callable[[], float] = time.time,
    ) -> "ClaimLedger":
        """Build a ledger from a CampaignConfig (or the campaign section of a RuntimeConfig)."""
        campaign = config.campaign if isinstance(config, RuntimeConfig) else config
        if not campaign.root:
            raise ConfigException("Campaign root is not configured")
        return cls(
            campaign.root,
            token_ledger=token_ledger,
            credential_gate=credential_gate,
            start=campaign.start,
            duration_s=campaign.duration_s,
            owner=campaign.owner,
            token_address=campaign.token_address,
            credential_address=campaign.credential_address,
            clock=clock,
            bind_leaf_to_claimant=campaign.bind_leaf_to_claimant,
        )

    # ------------------------------------------------------------------
    # Read-only configuration
    # ------------------------------------------------------------------

    @property
    def root(self) -> bytes:
        return self._root

    @property
    def hex_root(self) -> str:
        return to_hex(self._root)

    @property
    def deadline(self) -> float:
        return self._deadline

    @property
    def owner(self) -> Optional[str]:
        return self._owner

    @property
    def token_address(self) -> Optional[str]:
        return self._token_address

    @property
    def credential_address(self) -> Optional[str]:
        return self._credential_address

    @property
    def binds_leaf_to_claimant(self) -> bool:
        return self._bind_leaf

    # ------------------------------------------------------------------
    # Claim state queries
    # ------------------------------------------------------------------

    def is_open(self) -> bool:
        return self._clock() < self._deadline

    def is_claimed(self, index: int) -> bool:
        with self._lock:
            return self._claimed.is_set(index)

    @property
    def claimed_count(self) -> int:
        return self._claimed.count

    def claimed_indices(self) -> list[int]:
        with self._lock:
            return self._claimed.indices()

    @property
    def events(self) -> tuple[ClaimEvent, ...]:
        """Snapshot of the append-only claim log."""
        with self._lock:
            return tuple(self._events)

    def subscribe(self, listener: ClaimListener) -> None:
        """Register a callback invoked once per successful claim."""
        self._listeners.append(listener)

    def unsubscribe(self, listener: ClaimListener) -> None:
        if listener in self._listeners:
            self._listeners.remove(listener)

    # ------------------------------------------------------------------
    # Claim
    # ------------------------------------------------------------------

    def claim(
        self,
        proof: Sequence[Digest],
        leaf: Optional[Digest],
        index: int,
        amount: int,
        claimant: str,
    ) -> PayoutInstruction:
        """
        Claim the entitlement at index for claimant.

        Args:
            proof: Sibling digests, leaf level first
            leaf: The leaf being proven; None lets the ledger derive it
            index: Claim slot
            amount: Entitlement in token units
            claimant: Identity submitting the claim, receives the payout

        Returns:
            PayoutInstruction that the token ledger has already executed

        Raises:
            GateNotSatisfiedException, AlreadyClaimedException,
            WindowClosedException, InvalidProofException,
            TransferFailedException
        """
        if not self._credential_gate.holds(claimant):
            raise self._reject(GateNotSatisfiedException(
                "Claimant does not hold the required credential",
                index=index, claimant=claimant,
            ))

        try:
            claimant = normalize_address(claimant)
        except ValueError as e:
            raise InvalidEntryException(str(e), field_path="claimant") from e
        if not _is_uint256(index) or not _is_uint256(amount):
            raise self._reject(InvalidProofException(
                "Index and amount must be uint256 integers",
                index=index if isinstance(index, int) else None, claimant=claimant,
            ))

        with self._lock:
            if self._claimed.is_set(index):
                raise self._reject(AlreadyClaimedException(
                    f"Index {index} has already been claimed",
                    index=index, claimant=claimant,
                ))

            now = self._clock()
            if now >= self._deadline:
                raise self._reject(WindowClosedException(
                    "Claim window has closed",
                    index=index, claimant=claimant,
                    details={"deadline": self._deadline, "now": now},
                ))

            leaf_bytes = self._resolve_leaf(leaf, index, amount, claimant)
            try:
                proof_bytes = [to_bytes32(p) for p in proof]
            except ValueError as e:
                raise self._reject(InvalidProofException(
                    f"Malformed proof element: {e}", index=index, claimant=claimant,
                )) from e
            if not verify_merkle_proof(proof_bytes, leaf_bytes, self._root):
                raise self._reject(InvalidProofException(
                    "Proof does not match the published root",
                    index=index, claimant=claimant,
                ))

            self._claimed.set(index)
            try:
                transferred = self._token_ledger.transfer(claimant, amount)
            except Exception as e:
                self._claimed.unset(index)
                raise self._reject(TransferFailedException(
                    f"Token transfer raised: {e}", index=index, claimant=claimant,
                )) from e
            if not transferred:
                self._claimed.unset(index)
                raise self._reject(TransferFailedException(
                    "Token ledger refused the transfer", index=index, claimant=claimant,
                ))

            event = ClaimEvent(
                sequence=len(self._events),
                claimant=claimant,
                amount=amount,
                index=index,
                claimed_at=datetime.fromtimestamp(now, tz=timezone.utc),
            )
            self._events.append(event)
            listeners = list(self._listeners)

        logger.info("Claim succeeded: index %d, %d units to %s", index, amount, claimant)
        for listener in listeners:
            try:
                listener(event)
            except Exception:
                # The claim is committed; a failing observer cannot undo it
                logger.exception("Claim listener %r failed on event %d", listener, event.sequence)

        return PayoutInstruction(recipient=claimant, amount=amount, index=index)

    def _resolve_leaf(
        self,
        leaf: Optional[Digest],
        index: int,
        amount: int,
        claimant: str,
    ) -> bytes:
        supplied: Optional[bytes] = None
        if leaf is not None:
            try:
                supplied = to_bytes32(leaf)
            except ValueError as e:
                raise self._reject(InvalidProofException(
                    f"Malformed leaf: {e}", index=index, claimant=claimant,
                )) from e

        if supplied is not None and not self._bind_leaf:
            return supplied

        expected = leaf_hash(Entry(address=claimant, index=index, amount=amount))
        if supplied is not None and supplied != expected:
            raise self._reject(InvalidProofException(
                "Leaf does not encode (claimant, index, amount)",
                index=index, claimant=claimant,
            ))
        return expected

    @staticmethod
    def _reject(exc: ClaimRejectedException) -> ClaimRejectedException:
        logger.warning("Claim rejected [%s]: %s %s", exc.code.value, exc.message, exc.details)
        return exc


def _is_uint256(value: object) -> bool:
    return isinstance(value, int) and not isinstance(value, bool) and 0 <= value <= UINT256_MAX


def _optional_address(value: Optional[str], name: str) -> Optional[str]:
    if value is None:
        return None
    try:
        return normalize_address(value)
    except ValueError as e:
        raise ConfigException(f"Invalid {name}: {e}") from e


__all__ = [
    "ClaimLedger",
    "ClaimListener",
]
