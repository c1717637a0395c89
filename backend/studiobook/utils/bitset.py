from __future__ import annotations

from typing import Iterable, List, Tuple

# 30-min resolution → 48 slots/day
SLOTS_PER_DAY = 48
BYTES_PER_DAY = 6
_FULL_DAY = (1 << SLOTS_PER_DAY) - 1


def new_empty_bits() -> bytes:
    return bytes(BYTES_PER_DAY)


def _check_length(bits: bytes) -> None:
    if len(bits) != BYTES_PER_DAY:
        raise ValueError("bits length must be 6 for 30-min resolution")


def pack_indexes(indexes: Iterable[int]) -> bytes:
    b = bytearray(BYTES_PER_DAY)
    for idx in indexes:
        if not (0 <= idx < SLOTS_PER_DAY):
            raise ValueError(f"index out of range: {idx}")
        byte_i = idx // 8
        bit_i = idx % 8
        b[byte_i] |= 1 << bit_i
    return bytes(b)


def unpack_indexes(bits: bytes) -> List[int]:
    _check_length(bits)
    out: List[int] = []
    for byte_i, val in enumerate(bits):
        for bit_i in range(8):
            idx = byte_i * 8 + bit_i
            if idx >= SLOTS_PER_DAY:
                break
            if (val >> bit_i) & 1:
                out.append(idx)
    return out


def toggle_index(bits: bytes, idx: int, value: bool) -> bytes:
    _check_length(bits)
    if not (0 <= idx < SLOTS_PER_DAY):
        raise ValueError("index out of range")
    b = bytearray(bits)
    byte_i = idx // 8
    bit_i = idx % 8
    if value:
        b[byte_i] |= 1 << bit_i
    else:
        b[byte_i] &= ~(1 << bit_i)
    return bytes(b)


def has_index(bits: bytes, idx: int) -> bool:
    _check_length(bits)
    return bool((bits[idx // 8] >> (idx % 8)) & 1)


def complement_bits(bits: bytes) -> bytes:
    """Every slot of the day that is not set in ``bits``."""
    _check_length(bits)
    value = int.from_bytes(bits, "little")
    return (~value & _FULL_DAY).to_bytes(BYTES_PER_DAY, "little")


def union_bits(left: bytes, right: bytes) -> bytes:
    _check_length(left)
    _check_length(right)
    return bytes(a | b for a, b in zip(left, right))


def windows_from_bits(bits: bytes) -> List[Tuple[str, str]]:
    """Return merged half-hour windows as ('HH:MM','HH:MM') tuples; the end is exclusive."""
    idxs = unpack_indexes(bits)
    if not idxs:
        return []
    # Merge consecutive indexes
    windows: List[Tuple[int, int]] = []
    start = prev = idxs[0]
    for idx in idxs[1:]:
        if idx == prev + 1:
            prev = idx
            continue
        windows.append((start, prev + 1))
        start = prev = idx
    windows.append((start, prev + 1))

    def idx_to_time(i: int) -> str:
        minutes = i * 30
        hh = minutes // 60
        mm = minutes % 60
        return f"{hh:02d}:{mm:02d}"

    return [(idx_to_time(s), idx_to_time(e)) for s, e in windows]
