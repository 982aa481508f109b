"""
Ledger address handling.

Two address formats are accepted everywhere:

- native account ids, ``shard.realm.num`` (e.g. ``0.0.123456``)
- hex addresses, with or without ``0x``, up to 20 bytes

The canonical form is ``0x`` followed by 40 lowercase hex digits. A
native id maps to its "long-zero" address: shard (4 bytes), realm
(8 bytes) and num (8 bytes), big-endian.
"""

import re
from typing import Optional

from zkredit.domain.entities import TransferMode
from zkredit.domain.exceptions import ValidationError

ADDRESS_HEX_LENGTH = 40

_NATIVE_ID = re.compile(r"^(\d+)\.(\d+)\.(\d+)$")
_HEX = re.compile(r"^[0-9a-fA-F]+$")

_MAX_SHARD = 2**32 - 1
_MAX_REALM = 2**64 - 1
_MAX_NUM = 2**64 - 1


def _parse_native_id(value: str) -> tuple[int, int, int]:
    match = _NATIVE_ID.match(value)
    if match is None:
        raise ValidationError(f"Malformed account id: {value!r}")
    shard, realm, num = (int(part) for part in match.groups())
    if shard > _MAX_SHARD or realm > _MAX_REALM or num > _MAX_NUM:
        raise ValidationError(f"Account id out of range: {value!r}")
    return shard, realm, num


def normalize_address(value: Optional[str]) -> str:
    """
    Convert a native account id or hex address to the canonical hex form.

    Idempotent: ``normalize_address(normalize_address(x)) == normalize_address(x)``.

    Raises:
        ValidationError: If the value is empty or malformed
    """
    if value is None or not value.strip():
        raise ValidationError("Address value is empty")

    candidate = value.strip()

    if "." in candidate:
        shard, realm, num = _parse_native_id(candidate)
        return f"0x{shard:08x}{realm:016x}{num:016x}"

    hex_part = candidate[2:] if candidate[:2].lower() == "0x" else candidate
    if not hex_part or not _HEX.match(hex_part):
        raise ValidationError(f"Malformed hex address: {value!r}")
    if len(hex_part) > ADDRESS_HEX_LENGTH:
        raise ValidationError(f"Hex address longer than 20 bytes: {value!r}")

    return "0x" + hex_part.lower().rjust(ADDRESS_HEX_LENGTH, "0")


def to_account_id(address: str) -> str:
    """
    Map an address to the identifier used for direct transfers.

    Long-zero addresses (leading shard and realm bytes all zero) become
    ``0.0.num``; any other address is an account alias and is returned in
    canonical hex form.
    """
    if "." in address.strip():
        shard, realm, num = _parse_native_id(address.strip())
        return f"{shard}.{realm}.{num}"

    canonical = normalize_address(address)
    hex_part = canonical[2:]
    if int(hex_part[:24], 16) == 0:
        return f"0.0.{int(hex_part[24:], 16)}"
    return canonical


def is_null_contract(identifier: Optional[str]) -> bool:
    """True when no payment contract is configured or it is the zero address."""
    if identifier is None or not identifier.strip():
        return True
    candidate = identifier.strip()
    if "." in candidate:
        return _NATIVE_ID.match(candidate) is not None and all(
            int(part) == 0 for part in candidate.split(".")
        )
    return int(normalize_address(candidate), 16) == 0


def resolve_contract_id(identifier: str) -> str:
    """
    Canonicalize a payment contract identifier.

    Native ids are kept as ``shard.realm.num``; hex ids are normalized.

    Raises:
        ValidationError: If the identifier is empty or malformed
    """
    if identifier is None or not identifier.strip():
        raise ValidationError("Contract identifier is empty")
    candidate = identifier.strip()
    if "." in candidate:
        shard, realm, num = _parse_native_id(candidate)
        return f"{shard}.{realm}.{num}"
    return normalize_address(candidate)


def resolve_mode(contract_id: Optional[str]) -> TransferMode:
    """
    Select the settlement mode for a configured payment contract.

    Returns:
        DIRECT_TRANSFER when the contract is absent or null,
        CONTRACT_CALL otherwise

    Raises:
        ValidationError: If a non-null contract id is malformed
    """
    if is_null_contract(contract_id):
        return TransferMode.DIRECT_TRANSFER
    resolve_contract_id(contract_id)
    return TransferMode.CONTRACT_CALL
